import json
import logging
from typing import Any, Dict, Optional

import httpx

from shared.config import settings

logger = logging.getLogger(__name__)

METADATA_FIELDS = ("conversation_id", "call_sid", "to_number", "recipient_name", "from_name", "agent_id", "prompt")


def conversation_payload(reply_text: str) -> Optional[Dict[str, Any]]:
    """
    Builds the conversation record for a `make_call` reply, or None when the
    reply is not a successful JSON result.
    """
    try:
        reply = json.loads(reply_text)
    except ValueError:
        logger.warning("make_call reply is not JSON, no conversation will be recorded")
        return None
    if not isinstance(reply, dict) or not reply.get("success") or not reply.get("data"):
        return None

    data = reply["data"]
    if not isinstance(data, dict):
        logger.warning("make_call reply data is not an object, no conversation will be recorded")
        return None
    return {
        "externalCallId": data.get("conversation_id"),
        "metadata": {field: data.get(field) for field in METADATA_FIELDS},
    }


class ConversationService:
    """Reports placed calls to the conversation tracking API."""

    def __init__(self, base_url: Optional[str] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.CONVERSATION_API_URL).rstrip("/")
        self.http_client = http_client

    async def record_call(self, reply_text: str) -> bool:
        """Posts the call metadata. Failures are logged and reported as False."""
        payload = conversation_payload(reply_text)
        if payload is None:
            return False

        try:
            if self.http_client is not None:
                response = await self.http_client.post(f"{self.base_url}/v1/conversations", json=payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(f"{self.base_url}/v1/conversations", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to send conversation data for call {payload['externalCallId']}: {e}")
            return False

        logger.info(f"📞 Recorded conversation {payload['externalCallId']}")
        return True
