from fastmcp.server.dependencies import get_http_headers

from shared.auth.credentials import CredentialContext, ShopifyConfig, resolve_shopify_config


def get_credential_context() -> CredentialContext:
    """
    Builds the credential context from the headers injected by the gateway.
    `include_all` keeps the Authorization header, which FastMCP strips by default.
    """
    return CredentialContext.from_headers(get_http_headers(include_all=True))


def get_shopify_config() -> ShopifyConfig:
    return resolve_shopify_config(get_credential_context())
