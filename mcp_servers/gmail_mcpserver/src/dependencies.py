import logging

import httpx
from fastmcp.server.dependencies import get_http_headers

from shared.auth.auth_portal import AuthPortalService
from shared.auth.credentials import CredentialContext, GoogleConfig, resolve_google_config
from shared.config import settings

logger = logging.getLogger(__name__)


def get_credential_context() -> CredentialContext:
    return CredentialContext.from_headers(get_http_headers(include_all=True))


async def context_from_portal(ctx: CredentialContext) -> CredentialContext:
    """
    Completes a context that carries a user id but no token by asking the auth
    portal. When the portal has no valid token the context is marked invalid and
    carries the authorization URL the user has to visit.
    """
    async with httpx.AsyncClient() as client:
        portal = AuthPortalService(http_client=client)
        token = await portal.get_valid_token(ctx.user_id)
        if token.valid:
            return ctx.model_copy(update={"access_token": token.access_token})

        logger.info(f"🔑 No valid Gmail token for user {ctx.user_id}, requesting authorization URL")
        authorization = await portal.request_authorization(ctx.user_id, settings.GMAIL_AUTH_CONFIG_ID)

    if authorization.auth_url:
        return ctx.model_copy(update={"valid": False, "auth_url": authorization.auth_url})
    return ctx.model_copy(update={
        "valid": False,
        "error": "Authentication required. Please visit this URL to authorize Gmail access: "
                 "Unable to generate authorization URL",
    })


async def get_gmail_config() -> GoogleConfig:
    ctx = get_credential_context()
    if ctx.valid and not ctx.access_token and ctx.user_id:
        ctx = await context_from_portal(ctx)
    return resolve_google_config(ctx, "Gmail")
