import sys
import os
from types import SimpleNamespace
from unittest.mock import patch, AsyncMock, MagicMock
import pytest

# Add project root to the Python path to allow for correct module imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../../..')))

from mcp_servers.call_for_me_mcpserver.src.services.remote_client import RemoteToolClient

MODULE = 'mcp_servers.call_for_me_mcpserver.src.services.remote_client'


def fake_client(texts=()):
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    client.call_tool = AsyncMock(return_value=SimpleNamespace(
        content=[SimpleNamespace(text=t) for t in texts]
    ))
    return client


@pytest.mark.asyncio
async def test_connects_once_with_streamable_http():
    client = fake_client(["first", "second"])
    with patch(f'{MODULE}.Client', return_value=client) as mock_client_cls, \
         patch(f'{MODULE}.StreamableHttpTransport') as mock_http, \
         patch(f'{MODULE}.SSETransport') as mock_sse:
        remote = RemoteToolClient("https://calls.example.com/mcp")
        result = await remote.call_tool("make_call", {"to_number": "+15550100"})
        await remote.call_tool("get_conversation", {"conversation_id": "c1"})

    mock_http.assert_called_once_with(url="https://calls.example.com/mcp")
    mock_sse.assert_not_called()
    assert mock_client_cls.call_count == 1
    assert result == "first\nsecond"


@pytest.mark.asyncio
async def test_falls_back_to_sse():
    failing = fake_client()
    failing.__aenter__ = AsyncMock(side_effect=RuntimeError("405 Method Not Allowed"))
    working = fake_client(["ok"])
    with patch(f'{MODULE}.Client', side_effect=[failing, working]), \
         patch(f'{MODULE}.StreamableHttpTransport'), \
         patch(f'{MODULE}.SSETransport') as mock_sse:
        remote = RemoteToolClient("https://calls.example.com/mcp")
        result = await remote.call_tool("get_conversation", {"conversation_id": "c1"})

    mock_sse.assert_called_once_with(url="https://calls.example.com/mcp")
    assert result == "ok"


@pytest.mark.asyncio
async def test_close_exits_the_session_once():
    client = fake_client(["ok"])
    with patch(f'{MODULE}.Client', return_value=client), \
         patch(f'{MODULE}.StreamableHttpTransport'):
        remote = RemoteToolClient("https://calls.example.com/mcp")
        await remote.connect()
        await remote.close()
        await remote.close()

    client.__aexit__.assert_awaited_once_with(None, None, None)


@pytest.mark.asyncio
async def test_close_without_connection_is_a_no_op():
    remote = RemoteToolClient("https://calls.example.com/mcp")
    await remote.close()
