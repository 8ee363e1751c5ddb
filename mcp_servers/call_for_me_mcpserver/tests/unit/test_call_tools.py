import sys
import os
import json
from unittest.mock import patch, AsyncMock, MagicMock
import pytest

# Add project root to the Python path to allow for correct module imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../../..')))

from mcp_servers.call_for_me_mcpserver.src.tools.calls import get_conversation, make_call

TOOLS = 'mcp_servers.call_for_me_mcpserver.src.tools.calls'

CALL_REPLY = json.dumps({
    "success": True,
    "data": {
        "conversation_id": "conv-1",
        "call_sid": "CA123",
        "to_number": "+15550100",
        "recipient_name": "Ada",
        "from_name": "Grace",
        "agent_id": "agent-9",
        "prompt": "Remind Ada about tomorrow",
    },
})


def remote_returning(reply):
    remote = MagicMock()
    remote.call_tool = AsyncMock(return_value=reply)
    return remote


@pytest.mark.asyncio
async def test_make_call_records_conversation_on_success():
    remote = remote_returning(CALL_REPLY)
    with patch(f'{TOOLS}.get_remote_client', return_value=remote), \
         patch(f'{TOOLS}.ConversationService') as mock_conversations:
        mock_conversations.return_value.record_call = AsyncMock(return_value=True)
        result = await make_call.fn(
            to_number="+15550100", recipient_name="Ada", from_name="Grace", prompt="Remind Ada about tomorrow"
        )

    remote.call_tool.assert_awaited_once_with("make_call", {
        "to_number": "+15550100",
        "recipient_name": "Ada",
        "from_name": "Grace",
        "prompt": "Remind Ada about tomorrow",
    })
    mock_conversations.return_value.record_call.assert_awaited_once_with(CALL_REPLY)
    assert result == CALL_REPLY


@pytest.mark.asyncio
async def test_make_call_connection_failure_text():
    remote = MagicMock()
    remote.call_tool = AsyncMock(side_effect=ConnectionError("connection refused"))
    with patch(f'{TOOLS}.get_remote_client', return_value=remote), \
         patch(f'{TOOLS}.ConversationService') as mock_conversations:
        result = await make_call.fn(to_number="+15550100", recipient_name="Ada", from_name="Grace", prompt="Hi")

    mock_conversations.assert_not_called()
    assert result == "Failed to make call: connection refused"


@pytest.mark.asyncio
async def test_get_conversation_forwards_reply():
    remote = remote_returning('{"status": "done"}')
    with patch(f'{TOOLS}.get_remote_client', return_value=remote):
        result = await get_conversation.fn(conversation_id="conv-1")

    remote.call_tool.assert_awaited_once_with("get_conversation", {"conversation_id": "conv-1"})
    assert result == '{"status": "done"}'


@pytest.mark.asyncio
async def test_get_conversation_failure_text():
    remote = MagicMock()
    remote.call_tool = AsyncMock(side_effect=RuntimeError("session closed"))
    with patch(f'{TOOLS}.get_remote_client', return_value=remote):
        result = await get_conversation.fn(conversation_id="conv-1")

    assert result == "Failed to get conversation: session closed"


@pytest.mark.asyncio
async def test_make_call_returns_reply_when_recording_fails():
    remote = remote_returning(CALL_REPLY)
    with patch(f'{TOOLS}.get_remote_client', return_value=remote), \
         patch(f'{TOOLS}.ConversationService') as mock_conversations:
        mock_conversations.return_value.record_call = AsyncMock(side_effect=RuntimeError("unexpected reply"))
        result = await make_call.fn(to_number="+15550100", recipient_name="Ada", from_name="Grace", prompt="Hi")

    assert result == CALL_REPLY


@pytest.mark.asyncio
async def test_make_call_with_non_object_data_skips_recording():
    reply = json.dumps({"success": True, "data": "queued"})
    remote = remote_returning(reply)
    with patch(f'{TOOLS}.get_remote_client', return_value=remote), \
         patch('mcp_servers.call_for_me_mcpserver.src.services.conversation_service.httpx.AsyncClient') as mock_http:
        result = await make_call.fn(to_number="+15550100", recipient_name="Ada", from_name="Grace", prompt="Hi")

    mock_http.assert_not_called()
    assert result == reply
