"""MCP server entry point."""

from mcp.server.fastmcp import FastMCP

from code_summarizer.core.config import parse_args_and_get_config
from code_summarizer.core.grammar import get_grammar
from code_summarizer.core.sentry import init_sentry
from code_summarizer.server.registry import register_all_tools

mcp = FastMCP("code-summarizer")


def run_mcp_server() -> None:
    """Run the MCP server.

    This function:
    1. Parses command-line arguments and loads configuration
    2. Initializes Sentry error tracking (if configured)
    3. Loads the Java grammar so the first request does not pay for it
    4. Registers all MCP tools and starts the stdio transport
    """
    parse_args_and_get_config()
    init_sentry()
    get_grammar()
    register_all_tools(mcp)
    mcp.run(transport="stdio")
