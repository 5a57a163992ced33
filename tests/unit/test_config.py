"""Tests for configuration loading and endpoint persistence."""

import os
from unittest.mock import Mock

import pytest
import yaml

from code_summarizer.constants import ConfigDefaults, DescriptionServiceDefaults
from code_summarizer.core import config as core_config
from code_summarizer.core.config import (
    default_config_path,
    parse_args_and_get_config,
    persist_endpoint,
    resolve_endpoint,
    validate_config_file,
)
from code_summarizer.core.exceptions import ConfigurationError, UnconfiguredEndpointError
from code_summarizer.models.config import SummarizerConfig


def _write(path, content: str) -> str:
    path.write_text(content)
    return str(path)


class TestSummarizerConfig:
    """Tests for the config model."""

    def test_defaults(self):
        """Test an empty config uses the service defaults."""
        config = SummarizerConfig()
        assert config.url is None
        assert config.timeout_seconds == DescriptionServiceDefaults.TIMEOUT_SECONDS
        assert config.max_attempts == DescriptionServiceDefaults.MAX_ATTEMPTS

    def test_blank_url_is_unset(self):
        """Test a blank url means no endpoint."""
        assert SummarizerConfig(url="   ").url is None

    def test_url_is_stripped(self):
        """Test surrounding whitespace is removed."""
        assert SummarizerConfig(url=" https://svc.test/d ").url == "https://svc.test/d"

    def test_rejects_non_http_url(self):
        """Test only http(s) endpoints are accepted."""
        with pytest.raises(ValueError, match="http"):
            SummarizerConfig(url="ftp://svc.test/d")


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid_file(self, tmp_path):
        """Test a complete config file loads."""
        path = _write(tmp_path / "c.yaml", "url: http://svc.test/d\ntimeout_seconds: 4\nmax_attempts: 2\n")
        config = validate_config_file(path)
        assert config.url == "http://svc.test/d"
        assert config.timeout_seconds == 4
        assert config.max_attempts == 2

    def test_missing_file(self, tmp_path):
        """Test a nonexistent path is rejected."""
        with pytest.raises(ConfigurationError, match="does not exist"):
            validate_config_file(str(tmp_path / "missing.yaml"))

    def test_directory(self, tmp_path):
        """Test a directory is rejected."""
        with pytest.raises(ConfigurationError, match="not a file"):
            validate_config_file(str(tmp_path))

    def test_empty_file(self, tmp_path):
        """Test an empty file is rejected."""
        with pytest.raises(ConfigurationError, match="empty"):
            validate_config_file(_write(tmp_path / "c.yaml", ""))

    def test_not_a_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        with pytest.raises(ConfigurationError, match="dictionary"):
            validate_config_file(_write(tmp_path / "c.yaml", "- url\n- other\n"))

    def test_invalid_yaml(self, tmp_path):
        """Test YAML syntax errors are reported."""
        with pytest.raises(ConfigurationError, match="YAML parsing failed"):
            validate_config_file(_write(tmp_path / "c.yaml", "url: [unclosed\n"))

    @pytest.mark.parametrize(
        "content",
        ["url: ftp://svc.test/d\n", "timeout_seconds: 0\n", "max_attempts: 0\n"],
    )
    def test_invalid_values(self, tmp_path, content):
        """Test model validation failures are reported with the path."""
        path = _write(tmp_path / "c.yaml", content)
        with pytest.raises(ConfigurationError, match="Validation failed") as exc_info:
            validate_config_file(path)
        assert exc_info.value.config_path == path


class TestPersistEndpoint:
    """Tests for persist_endpoint."""

    def test_writes_default_file(self):
        """Test the endpoint goes to the default config file when none is active."""
        path = persist_endpoint("http://svc.test/d")

        assert path == default_config_path()
        assert path.startswith(os.environ["HOME"])
        with open(path) as f:
            assert yaml.safe_load(f) == {"url": "http://svc.test/d"}

    def test_updates_process_configuration(self, tmp_path):
        """Test later lookups see the new endpoint."""
        path = str(tmp_path / "c.yaml")
        persist_endpoint(" http://svc.test/d ", path)

        assert core_config.SERVICE_URL == "http://svc.test/d"
        assert core_config.CONFIG_PATH == path
        assert resolve_endpoint() == "http://svc.test/d"

    def test_preserves_other_keys(self, tmp_path):
        """Test unrelated settings survive an endpoint update."""
        path = _write(tmp_path / "c.yaml", "url: http://old.test/d\nmax_attempts: 5\n")
        persist_endpoint("https://new.test/d", path)

        with open(path) as f:
            assert yaml.safe_load(f) == {"url": "https://new.test/d", "max_attempts": 5}

    def test_uses_active_config_path(self, tmp_path, monkeypatch):
        """Test the file loaded at startup is the one updated."""
        path = _write(tmp_path / "active.yaml", "timeout_seconds: 9\n")
        monkeypatch.setattr(core_config, "CONFIG_PATH", path)

        assert persist_endpoint("http://svc.test/d") == path
        assert validate_config_file(path).timeout_seconds == 9

    def test_invalid_url_not_written(self, tmp_path):
        """Test a rejected URL leaves the file and configuration untouched."""
        path = _write(tmp_path / "c.yaml", "url: http://old.test/d\n")
        with pytest.raises(ConfigurationError):
            persist_endpoint("not-a-url", path)

        with open(path) as f:
            assert yaml.safe_load(f) == {"url": "http://old.test/d"}
        assert core_config.SERVICE_URL is None


class TestResolveEndpoint:
    """Tests for resolve_endpoint."""

    def test_explicit_wins(self, monkeypatch):
        """Test an explicit endpoint overrides the configured one."""
        monkeypatch.setattr(core_config, "SERVICE_URL", "http://configured.test/d")
        assert resolve_endpoint("http://explicit.test/d") == "http://explicit.test/d"

    def test_configured_fallback(self, monkeypatch):
        """Test the configured endpoint is used when none is given."""
        monkeypatch.setattr(core_config, "SERVICE_URL", "http://configured.test/d")
        assert resolve_endpoint() == "http://configured.test/d"
        assert resolve_endpoint("   ") == "http://configured.test/d"

    def test_unconfigured(self):
        """Test the absence of any endpoint is an error, not a silent default."""
        with pytest.raises(UnconfiguredEndpointError, match=ConfigDefaults.URL_ENV):
            resolve_endpoint()


class TestParseArgsAndGetConfig:
    """Tests for command-line and environment configuration."""

    @pytest.fixture(autouse=True)
    def logging_calls(self, monkeypatch):
        """Record logging configuration instead of redirecting real output."""
        calls = Mock()
        monkeypatch.setattr(core_config, "configure_logging", calls)
        return calls

    def test_logging_flags(self, logging_calls, tmp_path):
        """Test --log-level and --log-file reach the logging setup."""
        log_file = str(tmp_path / "server.log")
        parse_args_and_get_config(["--log-level", "DEBUG", "--log-file", log_file])
        logging_calls.assert_called_once_with(log_level="DEBUG", log_file=log_file)

    def test_logging_environment(self, logging_calls, monkeypatch):
        """Test LOG_LEVEL is used when no flag is given."""
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        parse_args_and_get_config([])
        logging_calls.assert_called_once_with(log_level="WARNING", log_file=None)

    def test_defaults(self):
        """Test no flags, env or file leaves the endpoint unset."""
        parse_args_and_get_config([])
        assert core_config.CONFIG_PATH is None
        assert core_config.SERVICE_URL is None
        assert core_config.REQUEST_TIMEOUT == DescriptionServiceDefaults.TIMEOUT_SECONDS
        assert core_config.MAX_ATTEMPTS == DescriptionServiceDefaults.MAX_ATTEMPTS

    def test_flags(self):
        """Test command-line flags set the service configuration."""
        parse_args_and_get_config(["--url", "http://flag.test/d", "--timeout", "3.5", "--max-attempts", "5"])
        assert core_config.SERVICE_URL == "http://flag.test/d"
        assert core_config.REQUEST_TIMEOUT == 3.5
        assert core_config.MAX_ATTEMPTS == 5

    def test_environment(self, monkeypatch):
        """Test environment variables are used when flags are absent."""
        monkeypatch.setenv(ConfigDefaults.URL_ENV, "http://env.test/d")
        monkeypatch.setenv(ConfigDefaults.TIMEOUT_ENV, "12")
        monkeypatch.setenv(ConfigDefaults.MAX_ATTEMPTS_ENV, "4")
        parse_args_and_get_config([])
        assert core_config.SERVICE_URL == "http://env.test/d"
        assert core_config.REQUEST_TIMEOUT == 12.0
        assert core_config.MAX_ATTEMPTS == 4

    def test_config_file(self, tmp_path):
        """Test values come from the file given with --config."""
        path = _write(tmp_path / "c.yaml", "url: http://file.test/d\ntimeout_seconds: 6\nmax_attempts: 2\n")
        parse_args_and_get_config(["--config", path])
        assert core_config.CONFIG_PATH == path
        assert core_config.SERVICE_URL == "http://file.test/d"
        assert core_config.REQUEST_TIMEOUT == 6
        assert core_config.MAX_ATTEMPTS == 2

    def test_config_file_from_environment(self, tmp_path, monkeypatch):
        """Test the config file can be named through the environment."""
        path = _write(tmp_path / "c.yaml", "url: http://file.test/d\n")
        monkeypatch.setenv(ConfigDefaults.CONFIG_ENV, path)
        parse_args_and_get_config([])
        assert core_config.CONFIG_PATH == path
        assert core_config.SERVICE_URL == "http://file.test/d"

    def test_default_file_discovered(self):
        """Test the default file in the home directory is loaded when present."""
        with open(default_config_path(), "w") as f:
            f.write("url: http://home.test/d\n")
        parse_args_and_get_config([])
        assert core_config.CONFIG_PATH == default_config_path()
        assert core_config.SERVICE_URL == "http://home.test/d"

    def test_precedence(self, tmp_path, monkeypatch):
        """Test flags beat environment, which beats the config file."""
        path = _write(tmp_path / "c.yaml", "url: http://file.test/d\ntimeout_seconds: 6\nmax_attempts: 2\n")
        monkeypatch.setenv(ConfigDefaults.URL_ENV, "http://env.test/d")
        monkeypatch.setenv(ConfigDefaults.TIMEOUT_ENV, "12")
        parse_args_and_get_config(["--config", path, "--url", "http://flag.test/d"])
        assert core_config.SERVICE_URL == "http://flag.test/d"
        assert core_config.REQUEST_TIMEOUT == 12.0
        assert core_config.MAX_ATTEMPTS == 2

    def test_invalid_environment_values(self, monkeypatch):
        """Test unparseable or out-of-range values fall back to defaults."""
        monkeypatch.setenv(ConfigDefaults.TIMEOUT_ENV, "soon")
        monkeypatch.setenv(ConfigDefaults.MAX_ATTEMPTS_ENV, "0")
        parse_args_and_get_config([])
        assert core_config.REQUEST_TIMEOUT == DescriptionServiceDefaults.TIMEOUT_SECONDS
        assert core_config.MAX_ATTEMPTS == DescriptionServiceDefaults.MAX_ATTEMPTS

    def test_invalid_config_file_exits(self, tmp_path):
        """Test an explicitly named but invalid file stops startup."""
        path = _write(tmp_path / "c.yaml", "max_attempts: 0\n")
        with pytest.raises(SystemExit) as exc_info:
            parse_args_and_get_config(["--config", path])
        assert exc_info.value.code == 1
