"""
Long-lived MCP client for the remote call-placement server.

The connection is opened lazily on the first tool call and reused afterwards.
Streamable HTTP is tried first; servers that only speak the older SSE
transport are reached through the fallback.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from fastmcp import Client
from fastmcp.client.transports import SSETransport, StreamableHttpTransport

logger = logging.getLogger(__name__)


class RemoteToolClient:
    def __init__(self, url: str):
        self.url = url
        self._client: Optional[Client] = None
        self._lock = asyncio.Lock()

    async def _open(self, transport) -> Client:
        client = Client(transport)
        await client.__aenter__()
        return client

    async def connect(self) -> Client:
        async with self._lock:
            if self._client is not None:
                return self._client
            try:
                self._client = await self._open(StreamableHttpTransport(url=self.url))
                logger.info(f"Connected to remote MCP server at {self.url} using streamable HTTP")
            except Exception as e:
                logger.warning(f"Streamable HTTP connection to {self.url} failed ({e}), falling back to SSE")
                self._client = await self._open(SSETransport(url=self.url))
                logger.info(f"Connected to remote MCP server at {self.url} using SSE")
            return self._client

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> str:
        """Calls a remote tool and returns its text content joined by newlines."""
        client = await self.connect()
        result = await client.call_tool(name, arguments, raise_on_error=False)
        return "\n".join(item.text for item in result.content if getattr(item, "text", None) is not None)

    async def close(self):
        async with self._lock:
            if self._client is None:
                return
            client, self._client = self._client, None
            await client.__aexit__(None, None, None)
            logger.info("Closed remote MCP connection")
