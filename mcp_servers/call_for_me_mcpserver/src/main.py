"""
FastAPI application for the call-for-me MCP server.

The server relays its tools to a remote call-placement MCP server. The remote
connection is opened on first use and closed when the application shuts down.
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
from mcp_servers.call_for_me_mcpserver.src.mcp_builder import mcp_builder
from mcp_servers.call_for_me_mcpserver.src.dependencies import remote_client
# This import is crucial as it registers the tools with the mcp_builder instance.
import mcp_servers.call_for_me_mcpserver.src.tools

log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
log_format = '%(asctime)s - [call_for_me_mcp_server] - %(name)s - %(levelname)s - %(message)s'
logging.basicConfig(level=getattr(logging, log_level), format=log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    async with mcp_app.lifespan(app):
        yield
    await remote_client.close()

mcp_app = mcp_builder.http_app(path="/", transport="streamable-http")

app = FastAPI(lifespan=lifespan)
app.mount("/mcp", mcp_app)

@app.get("/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "ok"}

if __name__ == "__main__":
    port = settings.CONTAINERPORT_MCP_CALL_FOR_ME
    logger.info(f"Starting call-for-me MCP server on port {port}...")
    uvicorn.run(app, host="0.0.0.0", port=port)
