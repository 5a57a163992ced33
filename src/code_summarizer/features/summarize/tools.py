"""MCP tool definitions for the summarize feature.

This module registers MCP tools for:
- summarize_selection: Document a selection with a generated summary comment
- classify_selection: Report how a selection would be documented
- set_endpoint: Store the description service endpoint
"""

import time
from typing import Any, Dict, Optional

import sentry_sdk
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from code_summarizer.core.config import persist_endpoint, resolve_endpoint
from code_summarizer.core.logging import get_logger, invocation_context
from code_summarizer.features.summarize.classifier import classify_fragment
from code_summarizer.features.summarize.service import classify_and_synthesize

# =============================================================================
# Tool Implementations
# =============================================================================


def _skipped(reason: str) -> Dict[str, Any]:
    return {"skipped": True, "reason": reason}


async def summarize_selection_tool(
    selection_text: str,
    indent_column: int = 0,
    endpoint: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Generate a documentation comment for selected Java code.

    The selection is classified as a method declaration or a plain snippet.
    Methods get a Javadoc block with one `@param` line per parameter and an
    `@return` line unless the method is void; snippets get a single `//`
    line. The description comes from the configured description service.

    The returned `insertion_text` is meant to be inserted at the selection
    start; it ends with `indent_column` spaces so the selected code keeps its
    column.

    Args:
        selection_text: Selected source text, verbatim
        indent_column: Column (0-based) where the selection starts
        endpoint: Description service URL (defaults to the configured one)

    Returns:
        Dictionary containing:
        - comment: Comment text, newline-terminated
        - insertion_text: Comment plus trailing indentation
        - indent_column: Echo of the column used
        - classification: kind, is_void, param_names, veto_reason
        - execution_time_ms: Pipeline wall time

    Example usage:
        result = summarize_selection(
            selection_text="int add(int a, int b) { return a + b; }",
            indent_column=4,
        )
    """
    logger = get_logger("tool.summarize_selection")
    start_time = time.time()

    if not selection_text or not selection_text.strip():
        logger.info("tool_skipped", tool="summarize_selection", reason="empty_selection")
        return _skipped("empty selection")

    with invocation_context():
        logger.info(
            "tool_invoked",
            tool="summarize_selection",
            selection_length=len(selection_text),
            indent_column=indent_column,
            explicit_endpoint=bool(endpoint),
        )

        try:
            resolved = resolve_endpoint(endpoint)
            result = await classify_and_synthesize(
                selection_text=selection_text,
                indent_column=indent_column,
                endpoint=resolved,
            )

            execution_time = time.time() - start_time
            logger.info(
                "tool_completed",
                tool="summarize_selection",
                execution_time_seconds=round(execution_time, 3),
                kind=result.classification.kind.value,
            )

            return {
                "comment": result.comment.text,
                "insertion_text": result.comment.insertion_text,
                "indent_column": result.comment.indent_column,
                "classification": result.classification.to_dict(),
                "execution_time_ms": result.execution_time_ms,
            }

        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                "tool_failed",
                tool="summarize_selection",
                execution_time_seconds=round(execution_time, 3),
                error=str(e)[:200],
                error_type=type(e).__name__,
            )
            sentry_sdk.capture_exception(e)
            raise


def classify_selection_tool(selection_text: str) -> Dict[str, Any]:
    """
    Classify selected Java code without contacting the description service.

    Args:
        selection_text: Selected source text, verbatim

    Returns:
        Dictionary with kind ("method" or "snippet"), is_void, param_names and
        veto_reason (why a method-looking selection was treated as a snippet)
    """
    logger = get_logger("tool.classify_selection")

    if not selection_text or not selection_text.strip():
        return _skipped("empty selection")

    try:
        return classify_fragment(selection_text).to_dict()
    except Exception as e:
        logger.error("tool_failed", tool="classify_selection", error=str(e)[:200])
        sentry_sdk.capture_exception(e)
        raise


def set_endpoint_tool(url: str, config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Store the description service endpoint in the config file.

    Args:
        url: http(s) URL of the description service
        config_path: Config file to write (defaults to the active config file)

    Returns:
        Dictionary with the stored url and the config file path
    """
    logger = get_logger("tool.set_endpoint")
    logger.info("tool_invoked", tool="set_endpoint", config_path=config_path)

    try:
        path = persist_endpoint(url, config_path)
    except Exception as e:
        logger.error("tool_failed", tool="set_endpoint", error=str(e)[:200])
        sentry_sdk.capture_exception(e)
        raise

    return {"url": resolve_endpoint(), "config_path": path}


# =============================================================================
# MCP Registration
# =============================================================================


def _create_mcp_field_definitions() -> Dict[str, Dict[str, Any]]:
    """Create field definitions for MCP tool registration."""
    return {
        "summarize_selection": {
            "selection_text": Field(description="Selected Java source text, verbatim"),
            "indent_column": Field(default=0, description="0-based column where the selection starts"),
            "endpoint": Field(default=None, description="Description service URL (None = configured endpoint)"),
        },
        "classify_selection": {
            "selection_text": Field(description="Selected Java source text, verbatim"),
        },
        "set_endpoint": {
            "url": Field(description="http(s) URL of the description service"),
            "config_path": Field(default=None, description="Config file to write (None = active config file)"),
        },
    }


def register_summarize_tools(mcp: FastMCP) -> None:
    """Register all summarize feature tools with MCP server.

    Args:
        mcp: FastMCP server instance
    """
    fields = _create_mcp_field_definitions()

    @mcp.tool()
    async def summarize_selection(
        selection_text: str = fields["summarize_selection"]["selection_text"],
        indent_column: int = fields["summarize_selection"]["indent_column"],
        endpoint: Optional[str] = fields["summarize_selection"]["endpoint"],
    ) -> Dict[str, Any]:
        """Generate a documentation comment for selected Java code."""
        return await summarize_selection_tool(
            selection_text=selection_text,
            indent_column=indent_column,
            endpoint=endpoint,
        )

    @mcp.tool()
    def classify_selection(
        selection_text: str = fields["classify_selection"]["selection_text"],
    ) -> Dict[str, Any]:
        """Classify selected Java code as a method declaration or a snippet."""
        return classify_selection_tool(selection_text=selection_text)

    @mcp.tool()
    def set_endpoint(
        url: str = fields["set_endpoint"]["url"],
        config_path: Optional[str] = fields["set_endpoint"]["config_path"],
    ) -> Dict[str, Any]:
        """Store the description service endpoint in the config file."""
        return set_endpoint_tool(url=url, config_path=config_path)
