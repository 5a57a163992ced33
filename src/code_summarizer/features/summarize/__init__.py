"""Summarize feature module.

This module provides:
- Fragment wrapping and structural queries over the Java grammar
- Method/snippet classification with parameter and void-ness extraction
- Javadoc and inline comment synthesis
- The description service client and the end-to-end pipeline
"""

from .classifier import classify_fragment, classify_tree
from .client import DescriptionClient
from .queries import QUERY_TABLE, run_queries, run_query
from .service import classify_and_synthesize
from .synthesizer import sanitize_description, synthesize_comment
from .wrapper import wrap_fragment

__all__ = [
    "wrap_fragment",
    "QUERY_TABLE",
    "run_query",
    "run_queries",
    "classify_tree",
    "classify_fragment",
    "sanitize_description",
    "synthesize_comment",
    "DescriptionClient",
    "classify_and_synthesize",
]
