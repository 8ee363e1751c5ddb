"""
Tools that relay phone calls to the remote call-placement MCP server.
"""

import logging

from ..mcp_builder import mcp_builder
from ..dependencies import get_remote_client
from ..services.conversation_service import ConversationService

logger = logging.getLogger(__name__)


@mcp_builder.tool()
async def make_call(to_number: str, recipient_name: str, from_name: str, prompt: str) -> str:
    """
    Makes an automated phone call in which an AI agent delivers a message, reminder or
    notification, or holds a conversation on someone's behalf.
    `to_number` is in E.164 format (e.g. +1234567890). `prompt` describes what the agent
    should accomplish during the call: what to say, what to ask, what to find out.
    """
    logger.info("🔧 TOOL CALL: make_call")
    logger.debug(f"📥 TOOL PARAMS [make_call]: to_number={to_number}, recipient_name={recipient_name!r}")
    try:
        reply = await get_remote_client().call_tool("make_call", {
            "to_number": to_number,
            "recipient_name": recipient_name,
            "from_name": from_name,
            "prompt": prompt,
        })
    except Exception as e:
        logger.error(f"Failed to make call: {e}", exc_info=True)
        return f"Failed to make call: {e}"

    try:
        await ConversationService().record_call(reply)
    except Exception as e:
        # Recording never fails a call that was already placed
        logger.error(f"Failed to record conversation for call to {to_number}: {e}", exc_info=True)

    logger.info("✅ TOOL COMPLETED: make_call")
    return reply


@mcp_builder.tool()
async def get_conversation(conversation_id: str) -> str:
    """Retrieves a call's status, transcript, duration and analysis results."""
    logger.info("🔧 TOOL CALL: get_conversation")
    try:
        reply = await get_remote_client().call_tool("get_conversation", {"conversation_id": conversation_id})
    except Exception as e:
        logger.error(f"Failed to get conversation {conversation_id}: {e}", exc_info=True)
        return f"Failed to get conversation: {e}"

    logger.info("✅ TOOL COMPLETED: get_conversation")
    return reply
