"""Summarize pipeline.

selection -> wrap/parse/classify -> normalize -> describe() -> synthesize.

The only suspension point is the description request. Every invocation owns
its tree, classification and comment; nothing is shared between invocations
except the read-only grammar.
"""
import time
from typing import Optional

from code_summarizer.core import config as core_config
from code_summarizer.core.exceptions import UnconfiguredEndpointError
from code_summarizer.core.grammar import JavaGrammar
from code_summarizer.core.logging import get_logger
from code_summarizer.features.summarize.classifier import classify_fragment
from code_summarizer.features.summarize.client import DescriptionClient
from code_summarizer.features.summarize.synthesizer import synthesize_comment
from code_summarizer.models.summary import SummaryResult
from code_summarizer.utils.text import normalize_code

logger = get_logger(__name__)


async def classify_and_synthesize(
    selection_text: str,
    indent_column: int = 0,
    endpoint: Optional[str] = None,
    client: Optional[DescriptionClient] = None,
    grammar: Optional[JavaGrammar] = None,
) -> SummaryResult:
    """Produce the documentation comment for a selection.

    Args:
        selection_text: Selected source text, verbatim
        indent_column: Column of the selection start
        endpoint: Description service URL (ignored when client is given)
        client: Preconfigured description client
        grammar: Grammar to parse with (shared grammar by default)

    Returns:
        SummaryResult with the comment to insert at the selection start

    Raises:
        UnconfiguredEndpointError: If neither client nor a non-blank endpoint is given
        DescriptionServiceError: If no description could be obtained
        ValueError: If indent_column is negative
    """
    if indent_column < 0:
        raise ValueError(f"indent_column must be >= 0, got {indent_column}")

    if client is None:
        if not endpoint or not endpoint.strip():
            raise UnconfiguredEndpointError()
        client = DescriptionClient(
            endpoint,
            timeout_seconds=core_config.REQUEST_TIMEOUT,
            max_attempts=core_config.MAX_ATTEMPTS,
        )

    start_time = time.time()

    classification = classify_fragment(selection_text, grammar)
    normalized = normalize_code(selection_text)

    description = await client.describe(normalized)

    comment = synthesize_comment(classification, description, indent_column)
    execution_time = int((time.time() - start_time) * 1000)

    logger.info(
        "summary_synthesized",
        kind=classification.kind.value,
        indent_column=indent_column,
        comment_lines=comment.text.count("\n"),
        execution_time_ms=execution_time,
    )

    return SummaryResult(
        comment=comment,
        classification=classification,
        normalized_code=normalized,
        description=description,
        execution_time_ms=execution_time,
    )
