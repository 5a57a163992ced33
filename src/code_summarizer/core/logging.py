"""Structured logging for code-summarizer.

Events are JSON lines on stderr (stdout carries the MCP stdio transport) or in
a log file. Each summarize invocation binds its own ``invocation_id`` through
contextvars so events from concurrent invocations can be told apart.
"""
import sys
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, TextIO

import structlog

LOG_LEVELS: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


def _open_log_target(log_file: Optional[str]) -> TextIO:
    if log_file is None:
        return sys.stderr
    return open(log_file, "a", buffering=1)


def _add_service_name(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    event_dict.setdefault("service", "code-summarizer")
    return event_dict


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR); unknown names mean INFO
        log_file: Optional file path for logging (stderr by default)
    """
    numeric_level = LOG_LEVELS.get(log_level.upper(), LOG_LEVELS["INFO"])

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_service_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_open_log_target(log_file)),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically module or tool name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def invocation_context(**fields: Any) -> Iterator[str]:
    """Bind a fresh invocation id (plus ``fields``) to every event logged inside.

    Yields:
        The invocation id
    """
    invocation_id = uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(invocation_id=invocation_id, **fields):
        yield invocation_id
