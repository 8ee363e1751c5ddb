"""
Shared FastMCP builder instance for the Google Drive MCP server.
"""

from fastmcp import FastMCP

mcp_builder = FastMCP(
    name="google-drive-mcp-server",
    json_response=True
)
