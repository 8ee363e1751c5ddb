"""
Client for the external auth portal.

Servers that are not fronted by a token-injecting gateway ask the portal for a
stored access token by user id. When the portal has none, it can produce an
authorization URL the user must visit first. The portal performs the OAuth
exchange itself; this module only talks to its two endpoints.
"""

import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from shared.config import settings

logger = logging.getLogger(__name__)

PORTAL_TIMEOUT = 10.0


class AuthTokenResult(BaseModel):
    valid: bool
    access_token: Optional[str] = None
    error: Optional[str] = None


class AuthorizationResult(BaseModel):
    auth_url: Optional[str] = None
    error: Optional[str] = None


def _error_message(e: Exception, fallback: str) -> str:
    response = getattr(e, "response", None)
    if response is not None:
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("message"):
                return body["message"]
        except ValueError:
            pass
    return str(e) or fallback


class AuthPortalService:
    def __init__(self, base_url: Optional[str] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.AUTH_SERVER_URL).rstrip("/")
        self.http_client = http_client if http_client else httpx.AsyncClient()

    async def get_valid_token(self, user_id: str) -> AuthTokenResult:
        try:
            response = await self.http_client.post(
                f"{self.base_url}/api/v1/auth-apps/validate",
                json={"userId": user_id},
                timeout=PORTAL_TIMEOUT,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"💥 Token validation failed for user {user_id}: {e}")
            return AuthTokenResult(valid=False, error=_error_message(e, "Authentication service unavailable"))

        if body.get("status") == "success":
            return AuthTokenResult(valid=True, access_token=(body.get("data") or {}).get("accessToken"))

        logger.warning(f"Auth portal rejected token for user {user_id}: {body.get('message')}")
        return AuthTokenResult(valid=False, error=body.get("message") or "Token validation failed")

    async def request_authorization(self, user_id: str, auth_config_id: str) -> AuthorizationResult:
        payload = {"authConfigId": auth_config_id, "userId": user_id, "toolkit": "gmail"}
        try:
            response = await self.http_client.post(
                f"{self.base_url}/api/v1/auth-apps/request",
                json=payload,
                timeout=PORTAL_TIMEOUT,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"💥 Authorization request failed for user {user_id}: {e}")
            return AuthorizationResult(error=_error_message(e, "Authorization service unavailable"))

        if body.get("status") == "success":
            return AuthorizationResult(auth_url=(body.get("data") or {}).get("authUrl"))

        return AuthorizationResult(error=body.get("message") or "Failed to generate authorization URL")
