"""Text processing utilities.

This module provides the code normalization applied to selections before they
are sent to the description service, and the line-break handling used when
description text is embedded in comments.
"""

import re

__all__ = [
    "normalize_code",
    "collapse_line_breaks",
    "to_source_bytes",
]

_WHITESPACE_RUN = re.compile(r"\s+")
_LINE_BREAK_RUN = re.compile(r"[\r\n\x0b\x0c\x85\u2028\u2029]+")


def normalize_code(code: str) -> str:
    """Canonicalize code before it is sent to the description service.

    Every maximal run of whitespace becomes a single space, then every
    character is lowercased. Leading and trailing runs are kept as one space
    rather than trimmed. Normalizing twice gives the same result as
    normalizing once. Lone surrogates become ``?`` as they do for the parser.

    Args:
        code: Selected source text

    Returns:
        Normalized code string
    """
    return _WHITESPACE_RUN.sub(" ", to_source_bytes(code).decode("utf-8")).lower()


def collapse_line_breaks(text: str) -> str:
    """Replace each run of line breaks with a single space.

    Args:
        text: Arbitrary text

    Returns:
        Text guaranteed to fit on one line
    """
    return _LINE_BREAK_RUN.sub(" ", text)


def to_source_bytes(text: str) -> bytes:
    """UTF-8 bytes of ``text`` as handed to the parser.

    Lone surrogates (possible in JSON-decoded input) cannot be encoded and
    become ``?``, so malformed selections still parse.
    """
    return text.encode("utf-8", errors="replace")
