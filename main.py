"""code-summarizer MCP Server - Entry point.

Run with ``python main.py`` (or the ``code-summarizer`` console script).
"""

from code_summarizer.server.runner import run_mcp_server

if __name__ == "__main__":
    run_mcp_server()
