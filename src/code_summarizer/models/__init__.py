"""Data models for code-summarizer."""

from code_summarizer.models.config import SummarizerConfig
from code_summarizer.models.summary import (
    CapturedNode,
    Classification,
    ClassificationKind,
    QueryMatch,
    SummaryResult,
    SynthesizedComment,
    WrappedUnit,
)

__all__ = [
    # Config
    "SummarizerConfig",
    # Summary
    "CapturedNode",
    "Classification",
    "ClassificationKind",
    "QueryMatch",
    "SummaryResult",
    "SynthesizedComment",
    "WrappedUnit",
]
