"""Shared pytest fixtures for unit tests.

This module provides reusable fixtures for all unit test modules, including:
- Core fixtures (MockFastMCP, mock_mcp)
- Mock object factories (mock_httpx_client, http_response_factory)
- Description client fixtures with backoff disabled
"""

from typing import Any, Dict
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

TEST_ENDPOINT = "http://summarizer.test/describe"


class MockFastMCP:
    """Mock FastMCP class for testing."""

    def __init__(self, name: str = "test") -> None:
        self.name = name
        self.tools: Dict[str, Any] = {}

    def tool(self, **kwargs: Any) -> Any:
        def decorator(func: Any) -> Any:
            self.tools[func.__name__] = func
            return func
        return decorator

    def run(self, **kwargs: Any) -> None:
        pass


@pytest.fixture
def mock_mcp() -> MockFastMCP:
    """Provide a fresh mock MCP server instance."""
    return MockFastMCP("code-summarizer")


@pytest.fixture
def http_response_factory():
    """Factory for real httpx responses bound to the test endpoint.

    Returns:
        Callable taking (status_code, json=None, text=None)
    """
    def _factory(status_code: int = 200, json: Any = None, text: Any = None) -> httpx.Response:
        request = httpx.Request("POST", TEST_ENDPOINT)
        if json is not None:
            return httpx.Response(status_code, json=json, request=request)
        return httpx.Response(status_code, text=text or "", request=request)

    return _factory


@pytest.fixture
def mock_httpx_client():
    """Pre-configured AsyncMock for httpx client.

    Returns:
        AsyncMock: Configured httpx client mock

    Example:
        >>> async with mock_httpx_client as client:
        ...     response = await client.post(TEST_ENDPOINT, json={"code": "x"})
    """
    mock_client = AsyncMock()
    mock_response = Mock()

    mock_response.json.return_value = "a description"
    mock_response.text = "a description"
    mock_response.status_code = 200
    mock_response.raise_for_status = Mock()

    mock_client.post.return_value = mock_response
    mock_client.__aenter__.return_value = mock_client
    mock_client.__aexit__.return_value = None

    return mock_client


@pytest.fixture
def description_client():
    """DescriptionClient against the test endpoint with backoff disabled."""
    from code_summarizer.features.summarize.client import DescriptionClient

    return DescriptionClient(
        TEST_ENDPOINT,
        timeout_seconds=5.0,
        max_attempts=3,
        backoff_initial=0,
        backoff_max=0,
    )


@pytest.fixture
def fake_describer():
    """Stand-in for DescriptionClient whose describe() returns a fixed text."""
    client = Mock()
    client.describe = AsyncMock(return_value="adds two integers")
    return client
