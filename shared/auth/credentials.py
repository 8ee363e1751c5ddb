"""
Per-request credential handling shared by all MCP servers.

The upstream gateway authenticates the caller and injects the result into the
HTTP headers of every MCP request. This module turns those headers into a
CredentialContext and resolves it into a ready-to-use client configuration:

- Google servers only need a valid access token.
- Shopify additionally needs the store domain, normalized to `<shop>.myshopify.com`.

Nothing here performs network calls. Failures are raised as AuthError subclasses
so that tools can return the message to the caller without touching the provider.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from shared.config import settings
from shared.errors import AuthInvalid, InvalidDomain, MissingDomain, MissingToken

logger = logging.getLogger(__name__)

SHOPIFY_DOMAIN_SUFFIX = ".myshopify.com"
SHOPIFY_DOMAIN_HEADER = "x-mkp-shopify-domain"

# Letters, digits, dots and hyphens; must start and end with a letter or digit
SHOP_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.-]*[A-Za-z0-9]$")

_FALSE_VALUES = {"false", "0", "no"}


class CredentialContext(BaseModel):
    access_token: Optional[str] = None
    user_id: Optional[str] = None
    auth_url: Optional[str] = None
    valid: bool = True
    error: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_headers(cls, headers: Dict[str, str]) -> "CredentialContext":
        headers = {key.lower(): value for key, value in headers.items()}

        access_token = None
        authorization = headers.get("authorization", "")
        if authorization.lower().startswith("bearer "):
            access_token = authorization[len("bearer "):].strip() or None
        if not access_token:
            access_token = headers.get("x-access-token") or None

        metadata: Dict[str, Any] = {}
        raw_metadata = headers.get("x-auth-metadata")
        if raw_metadata:
            try:
                parsed = json.loads(raw_metadata)
                if isinstance(parsed, dict):
                    metadata = parsed
            except json.JSONDecodeError:
                logger.warning("Ignoring X-Auth-Metadata header: not valid JSON")

        return cls(
            access_token=access_token,
            user_id=headers.get("x-user-id") or None,
            auth_url=headers.get("x-auth-url") or None,
            valid=headers.get("x-auth-valid", "true").strip().lower() not in _FALSE_VALUES,
            error=headers.get("x-auth-error") or None,
            headers=headers,
            metadata=metadata,
        )


class GoogleConfig(BaseModel):
    access_token: str


class ShopifyConfig(BaseModel):
    access_token: str
    shop_domain: str
    api_version: str = settings.SHOPIFY_API_VERSION


def resolve_access_token(ctx: Optional[CredentialContext], provider: str) -> str:
    """Returns the access token of a valid context or raises the matching AuthError."""
    if ctx is None:
        raise MissingToken()

    if not ctx.valid:
        if ctx.auth_url:
            raise AuthInvalid(
                f"Authentication required. Please visit this URL to authorize {provider} access: {ctx.auth_url}",
                auth_url=ctx.auth_url,
            )
        raise AuthInvalid(ctx.error or f"Authentication required. Please authenticate with {provider} first.")

    if not ctx.access_token:
        raise MissingToken()

    return ctx.access_token


def normalize_shop_domain(store_name: str) -> str:
    """
    Normalizes a shop name, URL or domain into `<shop>.myshopify.com`.
    Already-normalized domains are returned unchanged.
    """
    domain = re.sub(r"^https?://", "", store_name.strip())
    if domain.endswith("/"):
        domain = domain[:-1]

    shop_name = domain[:-len(SHOPIFY_DOMAIN_SUFFIX)] if domain.endswith(SHOPIFY_DOMAIN_SUFFIX) else domain
    if not SHOP_NAME_PATTERN.fullmatch(shop_name):
        raise InvalidDomain(store_name)

    return f"{shop_name}{SHOPIFY_DOMAIN_SUFFIX}"


def resolve_google_config(ctx: Optional[CredentialContext], provider: str = "Google") -> GoogleConfig:
    return GoogleConfig(access_token=resolve_access_token(ctx, provider))


def resolve_shopify_config(ctx: Optional[CredentialContext]) -> ShopifyConfig:
    access_token = resolve_access_token(ctx, "Shopify")

    shop_domain = ctx.headers.get(SHOPIFY_DOMAIN_HEADER)
    if not shop_domain:
        user_info = ctx.metadata.get("userInfo")
        if isinstance(user_info, dict):
            shop_domain = user_info.get("name")

    if not shop_domain:
        raise MissingDomain()

    normalized = normalize_shop_domain(str(shop_domain))
    logger.debug(f"Resolved Shopify store domain: {normalized}")
    return ShopifyConfig(access_token=access_token, shop_domain=normalized)
