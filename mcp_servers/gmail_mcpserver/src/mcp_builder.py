"""
Shared FastMCP builder instance for the Gmail MCP server.

This module provides a single, shared FastMCP builder instance that:
- Is imported by all tool modules to register their functions
- Is turned into the HTTP app that main.py mounts under /mcp

The builder is configured for JSON responses.
"""

from fastmcp import FastMCP

# This is the single, shared builder instance that all tool modules will import.
mcp_builder = FastMCP(
    name="gmail-mcp-server",
    json_response=True
)
