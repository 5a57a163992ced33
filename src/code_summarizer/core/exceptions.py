"""Exception hierarchy for code-summarizer."""
from typing import Optional


class SummarizerError(Exception):
    """Base class for all code-summarizer errors."""


class ConfigurationError(SummarizerError):
    """Raised when a config file is missing or invalid."""

    def __init__(self, config_path: str, message: str) -> None:
        self.config_path = config_path
        self.message = message
        super().__init__(f"Invalid configuration file '{config_path}': {message}")


class UnconfiguredEndpointError(SummarizerError):
    """Raised when no description service endpoint is available."""

    def __init__(self, message: str = "No description service endpoint configured") -> None:
        super().__init__(message)


class GrammarLoadError(SummarizerError):
    """Raised when the Java grammar or its queries cannot be loaded."""


class UnknownQueryError(SummarizerError):
    """Raised when a structural query name is not in the query table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown structural query: {name}")


class DescriptionServiceError(SummarizerError):
    """Raised when the description service cannot produce a description.

    Attributes:
        endpoint: Service URL that was called
        status_code: Last HTTP status code seen, if any
        attempts: Number of attempts made before giving up
    """

    def __init__(
        self,
        message: str,
        endpoint: str = "",
        status_code: Optional[int] = None,
        attempts: int = 0,
    ) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        self.attempts = attempts
        super().__init__(message)


class MalformedDescriptionError(DescriptionServiceError):
    """Raised when the service answers with a payload that holds no usable description."""
