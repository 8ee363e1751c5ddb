"""
FastAPI application for the Gmail MCP server.

This module creates a FastAPI application that:
- Mounts a FastMCP server exposing the Gmail and contact-search tools
- Refuses to start without GMAIL_AUTH_CONFIG_ID, which the auth portal needs
  to issue authorization URLs for users without a stored token
"""

import os
import sys

# Add project root to the Python path BEFORE any imports that need it
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI

from shared.config import settings
from mcp_servers.gmail_mcpserver.src.mcp_builder import mcp_builder
# This import is crucial as it registers the tools with the mcp_builder instance.
import mcp_servers.gmail_mcpserver.src.tools

# Configure logging - can be controlled by LOG_LEVEL environment variable
log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
log_format = '%(asctime)s - [gmail_mcp_server] - %(name)s - %(levelname)s - %(message)s'
logging.basicConfig(level=getattr(logging, log_level), format=log_format)
logger = logging.getLogger(__name__)


def verify_auth_config():
    if not settings.GMAIL_AUTH_CONFIG_ID:
        logger.critical("FATAL: GMAIL_AUTH_CONFIG_ID environment variable is not set. The server cannot start.")
        raise ValueError("GMAIL_AUTH_CONFIG_ID environment variable must be set.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    verify_auth_config()
    async with mcp_app.lifespan(app):
        yield

# Create the MCP app first
mcp_app = mcp_builder.http_app(path="/", transport="streamable-http")

app = FastAPI(lifespan=lifespan)
app.mount("/mcp", mcp_app)

@app.get("/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "ok"}

if __name__ == "__main__":
    verify_auth_config()
    port = settings.CONTAINERPORT_MCP_GMAIL
    logger.info(f"Starting Gmail MCP server on port {port}...")
    uvicorn.run(app, host="0.0.0.0", port=port)
