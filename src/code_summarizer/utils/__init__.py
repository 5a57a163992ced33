"""Utilities module for code-summarizer.

This module provides text utilities for:
- Normalizing selected code before it is sent to the description service
- Keeping untrusted text on a single comment line
"""

from .text import collapse_line_breaks, normalize_code, to_source_bytes

__all__ = [
    "normalize_code",
    "collapse_line_breaks",
    "to_source_bytes",
]
