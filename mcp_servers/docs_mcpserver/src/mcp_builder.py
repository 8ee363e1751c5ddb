"""
Shared FastMCP builder instance for the Google Docs MCP server.
"""

from fastmcp import FastMCP

mcp_builder = FastMCP(
    name="google-docs-mcp-server",
    json_response=True
)
