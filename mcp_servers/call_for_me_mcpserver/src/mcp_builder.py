"""
Shared FastMCP builder instance for the call-for-me MCP server.
"""

from fastmcp import FastMCP

mcp_builder = FastMCP(
    name="call-for-me",
    json_response=True
)
