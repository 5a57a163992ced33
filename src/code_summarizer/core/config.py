"""Configuration management for code-summarizer."""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from code_summarizer.constants import ConfigDefaults, DescriptionServiceDefaults
from code_summarizer.core.exceptions import ConfigurationError, UnconfiguredEndpointError
from code_summarizer.core.logging import configure_logging, get_logger
from code_summarizer.models.config import SummarizerConfig

# Set by parse_args_and_get_config (or persist_endpoint)
CONFIG_PATH: Optional[str] = None
SERVICE_URL: Optional[str] = None
REQUEST_TIMEOUT: float = DescriptionServiceDefaults.TIMEOUT_SECONDS
MAX_ATTEMPTS: int = DescriptionServiceDefaults.MAX_ATTEMPTS


def default_config_path() -> str:
    """Location used when no config file was given."""
    return os.path.join(os.path.expanduser("~"), ConfigDefaults.DEFAULT_CONFIG_FILE)


def _load_yaml_mapping(config_path: str) -> Dict[str, Any]:
    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(config_path, f"YAML parsing failed: {e}") from e
    except OSError as e:
        raise ConfigurationError(config_path, f"Failed to read file: {e}") from e

    if config_data is None:
        raise ConfigurationError(config_path, "Config file is empty")

    if not isinstance(config_data, dict):
        raise ConfigurationError(config_path, "Config must be a YAML dictionary")

    return config_data


def validate_config_file(config_path: str) -> SummarizerConfig:
    """Validate a code-summarizer YAML config file.

    Args:
        config_path: Path to the YAML config file

    Returns:
        Validated SummarizerConfig model

    Raises:
        ConfigurationError: If config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(config_path, "File does not exist")

    if not os.path.isfile(config_path):
        raise ConfigurationError(config_path, "Path is not a file")

    config_data = _load_yaml_mapping(config_path)

    try:
        return SummarizerConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(config_path, f"Validation failed: {e}") from e


def persist_endpoint(url: str, config_path: Optional[str] = None) -> str:
    """Store the description service endpoint in the YAML config file.

    Other keys already present in the file are preserved. The in-process
    endpoint is updated as well so later invocations pick it up.

    Args:
        url: Endpoint to store
        config_path: Target file (defaults to the active config, then ~/code-summarizer.yaml)

    Returns:
        Path of the file that was written

    Raises:
        ConfigurationError: If the URL is invalid or the file cannot be written
    """
    global CONFIG_PATH, SERVICE_URL

    path = config_path or CONFIG_PATH or default_config_path()
    existing: Dict[str, Any] = {}
    if os.path.isfile(path) and os.path.getsize(path) > 0:
        existing = _load_yaml_mapping(path)

    existing[ConfigDefaults.URL_KEY] = url
    try:
        config = SummarizerConfig(**existing)
    except ValidationError as e:
        raise ConfigurationError(path, f"Validation failed: {e}") from e

    existing[ConfigDefaults.URL_KEY] = config.url
    try:
        with open(path, "w") as f:
            yaml.safe_dump(existing, f, default_flow_style=False, sort_keys=True)
    except OSError as e:
        raise ConfigurationError(path, f"Failed to write file: {e}") from e

    CONFIG_PATH = path
    SERVICE_URL = config.url
    get_logger("config").info("endpoint_persisted", config_path=path, url=config.url)
    return path


def resolve_endpoint(explicit: Optional[str] = None) -> str:
    """Pick the endpoint for a request: explicit argument first, then configuration.

    Raises:
        UnconfiguredEndpointError: If neither source provides a non-blank endpoint
    """
    for candidate in (explicit, SERVICE_URL):
        if candidate and candidate.strip():
            return candidate.strip()
    raise UnconfiguredEndpointError(
        "No description service endpoint configured; pass one explicitly, "
        f"set {ConfigDefaults.URL_ENV}, or call set_endpoint"
    )


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    prog = None
    if sys.argv[0].endswith("main.py"):
        prog = "python main.py"

    parser = argparse.ArgumentParser(
        prog=prog,
        description="code-summarizer MCP Server - Documents selected Java code with generated summaries",
        epilog=f"""
environment variables:
  {ConfigDefaults.CONFIG_ENV}        Path to YAML config file (overridden by --config flag)
  {ConfigDefaults.URL_ENV}           Description service endpoint (overridden by --url flag)
  {ConfigDefaults.TIMEOUT_ENV}       Request timeout in seconds
  {ConfigDefaults.MAX_ATTEMPTS_ENV}  Attempts per description request
  LOG_LEVEL                      Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  LOG_FILE                       Path to log file (logs to stderr by default)
  SENTRY_DSN                     Enables Sentry error tracking when set
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help=f"Path to YAML config file. Can also be set via {ConfigDefaults.CONFIG_ENV} env var.",
    )
    parser.add_argument(
        "--url",
        type=str,
        metavar="URL",
        default=None,
        help=f"Description service endpoint. Can also be set via {ConfigDefaults.URL_ENV} env var.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        default=None,
        help=f"Request timeout in seconds (default: {DescriptionServiceDefaults.TIMEOUT_SECONDS}).",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        metavar="N",
        default=None,
        help=f"Attempts per description request (default: {DescriptionServiceDefaults.MAX_ATTEMPTS}).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )
    return parser


def _resolve_and_validate_config(args: argparse.Namespace) -> tuple[Optional[str], SummarizerConfig]:
    """Resolve the config file path and load it.

    Precedence: --config flag > CODE_SUMMARIZER_CONFIG env > default file if present

    Note:
        Calls sys.exit(1) if an explicitly requested file fails validation.
    """
    config_path = args.config or os.environ.get(ConfigDefaults.CONFIG_ENV)
    if not config_path:
        fallback = default_config_path()
        if os.path.isfile(fallback):
            config_path = fallback

    if not config_path:
        return None, SummarizerConfig()

    try:
        return config_path, validate_config_file(config_path)
    except ConfigurationError as e:
        logger = get_logger("config")
        logger.error("config_validation_failed", config_path=config_path, error=str(e))
        sys.exit(1)


def _configure_logging_from_args(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments and environment.

    Precedence: --log-level/--log-file flags > env vars > defaults
    """
    log_level = args.log_level or os.environ.get("LOG_LEVEL", "INFO")
    log_file = args.log_file or os.environ.get("LOG_FILE")
    configure_logging(log_level=log_level, log_file=log_file)


def _configure_service_from_args(args: argparse.Namespace, file_config: SummarizerConfig) -> tuple[Optional[str], float, int]:
    """Resolve endpoint, timeout and attempts.

    Precedence: command-line flags > env vars > config file > defaults

    Returns:
        Tuple of (url, timeout_seconds, max_attempts).
    """
    service_logger = get_logger("config.service")

    url = args.url or os.environ.get(ConfigDefaults.URL_ENV) or file_config.url

    timeout = file_config.timeout_seconds
    if args.timeout is not None:
        timeout = args.timeout
    elif os.environ.get(ConfigDefaults.TIMEOUT_ENV):
        try:
            timeout = float(os.environ[ConfigDefaults.TIMEOUT_ENV])
        except ValueError:
            service_logger.warning("invalid_timeout_env", using_default=timeout)
    if timeout <= 0:
        service_logger.warning("invalid_timeout", value=timeout, using_default=DescriptionServiceDefaults.TIMEOUT_SECONDS)
        timeout = DescriptionServiceDefaults.TIMEOUT_SECONDS

    attempts = file_config.max_attempts
    if args.max_attempts is not None:
        attempts = args.max_attempts
    elif os.environ.get(ConfigDefaults.MAX_ATTEMPTS_ENV):
        try:
            attempts = int(os.environ[ConfigDefaults.MAX_ATTEMPTS_ENV])
        except ValueError:
            service_logger.warning("invalid_max_attempts_env", using_default=attempts)
    if attempts < 1:
        service_logger.warning("invalid_max_attempts", value=attempts, using_default=DescriptionServiceDefaults.MAX_ATTEMPTS)
        attempts = DescriptionServiceDefaults.MAX_ATTEMPTS

    service_logger.info("service_config", url_configured=bool(url), timeout_seconds=timeout, max_attempts=attempts)
    return url, timeout, attempts


def parse_args_and_get_config(argv: Optional[List[str]] = None) -> None:
    """Parse command-line arguments and set the module-level configuration."""
    global CONFIG_PATH, SERVICE_URL, REQUEST_TIMEOUT, MAX_ATTEMPTS

    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    _configure_logging_from_args(args)

    CONFIG_PATH, file_config = _resolve_and_validate_config(args)

    SERVICE_URL, REQUEST_TIMEOUT, MAX_ATTEMPTS = _configure_service_from_args(args, file_config)
