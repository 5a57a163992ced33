"""Core infrastructure for code-summarizer."""

from code_summarizer.core.config import (
    CONFIG_PATH,
    MAX_ATTEMPTS,
    REQUEST_TIMEOUT,
    SERVICE_URL,
    parse_args_and_get_config,
    persist_endpoint,
    resolve_endpoint,
    validate_config_file,
)
from code_summarizer.core.exceptions import (
    ConfigurationError,
    DescriptionServiceError,
    GrammarLoadError,
    MalformedDescriptionError,
    SummarizerError,
    UnconfiguredEndpointError,
    UnknownQueryError,
)
from code_summarizer.core.grammar import JavaGrammar, get_grammar
from code_summarizer.core.logging import (
    configure_logging,
    get_logger,
    invocation_context,
)
from code_summarizer.core.sentry import (
    init_sentry,
)

__all__ = [
    # Exceptions
    "SummarizerError",
    "ConfigurationError",
    "UnconfiguredEndpointError",
    "GrammarLoadError",
    "UnknownQueryError",
    "DescriptionServiceError",
    "MalformedDescriptionError",
    # Logging
    "configure_logging",
    "get_logger",
    "invocation_context",
    # Config
    "CONFIG_PATH",
    "SERVICE_URL",
    "REQUEST_TIMEOUT",
    "MAX_ATTEMPTS",
    "validate_config_file",
    "parse_args_and_get_config",
    "persist_endpoint",
    "resolve_endpoint",
    # Sentry
    "init_sentry",
    # Grammar
    "JavaGrammar",
    "get_grammar",
]
