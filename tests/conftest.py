"""Shared pytest fixtures for code-summarizer test suite.

This module provides common fixtures used across unit tests, reducing
duplication and standardizing test setup.
"""

# Add project root to path for imports
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Configuration Isolation Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Reset module-level configuration and hide any real config file.

    HOME points at an empty temporary directory so the default config file
    lookup never finds a developer's real file.
    """
    from code_summarizer.constants import ConfigDefaults, DescriptionServiceDefaults
    from code_summarizer.core import config as core_config

    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    (tmp_path / "home").mkdir()
    for name in (
        ConfigDefaults.CONFIG_ENV,
        ConfigDefaults.URL_ENV,
        ConfigDefaults.TIMEOUT_ENV,
        ConfigDefaults.MAX_ATTEMPTS_ENV,
        "LOG_LEVEL",
        "LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.setattr(core_config, "CONFIG_PATH", None)
    monkeypatch.setattr(core_config, "SERVICE_URL", None)
    monkeypatch.setattr(core_config, "REQUEST_TIMEOUT", DescriptionServiceDefaults.TIMEOUT_SECONDS)
    monkeypatch.setattr(core_config, "MAX_ATTEMPTS", DescriptionServiceDefaults.MAX_ATTEMPTS)
    yield


# ============================================================================
# Sample Code Fixtures
# ============================================================================

@pytest.fixture
def sample_method() -> str:
    """Provide a well-formed non-void Java method.

    Returns:
        str: Method declaration with two parameters
    """
    return "int add(int a, int b) { return a + b; }"


@pytest.fixture
def sample_void_method() -> str:
    """Provide a well-formed void Java method.

    Returns:
        str: Method declaration with one parameter
    """
    return "void log(String msg) { }"


@pytest.fixture
def sample_statement() -> str:
    """Provide a plain statement that is not a declaration.

    Returns:
        str: Java statement
    """
    return "System.out.println(x);"


@pytest.fixture
def sample_multiline_method() -> str:
    """Provide a method spread over several lines with irregular whitespace.

    Returns:
        str: Multi-line public method
    """
    return """public String   greet(String name,
                      int times) {
        StringBuilder sb = new StringBuilder();
        for (int i = 0; i < times; i++) {
            sb.append("Hello, ").append(name);
        }
        return sb.toString();
    }"""
