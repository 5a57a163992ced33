"""Shared constants across the code-summarizer codebase.

This module centralizes magic numbers and fixed strings so the wrapper,
synthesizer and description client agree on them.
"""


class GrammarDefaults:
    """Fragment wrapping configuration."""

    LANGUAGE = "java"
    WRAPPER_CLASS_NAME = "__SummarizerFragment__"
    WRAPPER_PREFIX = "class " + WRAPPER_CLASS_NAME + " {\n"
    WRAPPER_SUFFIX = "\n}\n"


class CommentDefaults:
    """Markers used when rendering comments."""

    BANNER = "Auto-generated summary, review before committing."
    INLINE_MARKER = "//"
    BLOCK_OPEN = "/**"
    BLOCK_CONTINUATION = " *"
    BLOCK_CLOSE = " */"
    BLOCK_CLOSE_SEQUENCE = "*/"
    BLOCK_CLOSE_ESCAPED = "*&#47;"
    BACKSLASH_ENTITY = "&#92;"
    PARAM_TAG = "@param"
    RETURN_TAG = "@return"


class DescriptionServiceDefaults:
    """Defaults for the remote description service."""

    TIMEOUT_SECONDS = 30.0
    MAX_ATTEMPTS = 3
    BACKOFF_INITIAL_SECONDS = 0.5
    BACKOFF_MAX_SECONDS = 8.0
    RESPONSE_KEYS = ("description", "summary")

    # Retried with backoff
    TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class ConfigDefaults:
    """Environment variable names and config file defaults."""

    CONFIG_ENV = "CODE_SUMMARIZER_CONFIG"
    URL_ENV = "CODE_SUMMARIZER_URL"
    TIMEOUT_ENV = "CODE_SUMMARIZER_TIMEOUT"
    MAX_ATTEMPTS_ENV = "CODE_SUMMARIZER_MAX_ATTEMPTS"
    DEFAULT_CONFIG_FILE = "code-summarizer.yaml"
    URL_KEY = "url"
