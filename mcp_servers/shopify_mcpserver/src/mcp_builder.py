"""
Shared FastMCP builder instance for the Shopify MCP server.

Every tool module imports this instance to register its functions, and
main.py turns it into the HTTP app that is mounted under /mcp.
"""

from fastmcp import FastMCP

mcp_builder = FastMCP(
    name="shopify-mcp-server",
    json_response=True
)
