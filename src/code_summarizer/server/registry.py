"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from code_summarizer.features.summarize.tools import register_summarize_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features.

    Summarize (3 tools - summarize_selection, classify_selection, set_endpoint)
    """
    register_summarize_tools(mcp)
