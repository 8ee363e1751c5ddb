import os
import sys
import pytest

# Add the project root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', '..', '..')))

from shared.auth.credentials import (
    CredentialContext,
    normalize_shop_domain,
    resolve_access_token,
    resolve_google_config,
    resolve_shopify_config,
)
from shared.errors import AuthInvalid, InvalidDomain, MissingDomain, MissingToken


def test_context_reads_bearer_token_and_auth_headers():
    ctx = CredentialContext.from_headers({
        "Authorization": "Bearer ya29.token",
        "X-User-Id": "user-1",
        "X-Auth-Metadata": '{"userInfo": {"name": "teststore"}}',
    })

    assert ctx.access_token == "ya29.token"
    assert ctx.user_id == "user-1"
    assert ctx.valid is True
    assert ctx.metadata == {"userInfo": {"name": "teststore"}}


def test_context_falls_back_to_access_token_header():
    ctx = CredentialContext.from_headers({"x-access-token": "shpat_abc"})
    assert ctx.access_token == "shpat_abc"


def test_context_ignores_malformed_metadata():
    ctx = CredentialContext.from_headers({"x-auth-metadata": "{not json"})
    assert ctx.metadata == {}


def test_context_marked_invalid():
    ctx = CredentialContext.from_headers({"x-auth-valid": "False", "x-auth-error": "Token expired"})
    assert ctx.valid is False
    assert ctx.error == "Token expired"


def test_resolve_valid_context_returns_token():
    ctx = CredentialContext(access_token="ya29.token")
    assert resolve_access_token(ctx, "Google") == "ya29.token"
    assert resolve_google_config(ctx).access_token == "ya29.token"


def test_invalid_context_mentions_auth_url():
    ctx = CredentialContext(valid=False, auth_url="https://auth.example.com/start")

    with pytest.raises(AuthInvalid) as exc_info:
        resolve_google_config(ctx, "Gmail")

    assert "https://auth.example.com/start" in exc_info.value.message
    assert "Gmail" in exc_info.value.message
    assert exc_info.value.auth_url == "https://auth.example.com/start"


def test_invalid_context_without_url_uses_error_text():
    ctx = CredentialContext(valid=False, error="Token revoked", access_token="stale")

    with pytest.raises(AuthInvalid, match="Token revoked"):
        resolve_access_token(ctx, "Google")


def test_missing_token():
    with pytest.raises(MissingToken):
        resolve_google_config(CredentialContext())
    with pytest.raises(MissingToken):
        resolve_google_config(None)


@pytest.mark.parametrize("name, expected", [
    ("foo", "foo.myshopify.com"),
    ("foo.myshopify.com", "foo.myshopify.com"),
    ("https://foo.myshopify.com/", "foo.myshopify.com"),
    ("  http://my-store  ", "my-store.myshopify.com"),
])
def test_normalize_shop_domain(name, expected):
    assert normalize_shop_domain(name) == expected


def test_normalize_shop_domain_is_idempotent():
    once = normalize_shop_domain("https://foo.myshopify.com/")
    assert normalize_shop_domain(once) == once


@pytest.mark.parametrize("name", ["-bad-", "", "bad_store", "store/products"])
def test_normalize_shop_domain_rejects_invalid_names(name):
    with pytest.raises(InvalidDomain):
        normalize_shop_domain(name)


def test_shopify_config_from_domain_header():
    ctx = CredentialContext.from_headers({
        "x-access-token": "shpat_abc",
        "x-mkp-shopify-domain": "teststore",
    })

    config = resolve_shopify_config(ctx)

    assert config.shop_domain == "teststore.myshopify.com"
    assert config.access_token == "shpat_abc"
    assert config.api_version == "2025-10"


def test_shopify_config_from_metadata():
    ctx = CredentialContext(access_token="shpat_abc", metadata={"userInfo": {"name": "https://teststore.myshopify.com"}})
    assert resolve_shopify_config(ctx).shop_domain == "teststore.myshopify.com"


def test_shopify_config_without_domain():
    with pytest.raises(MissingDomain):
        resolve_shopify_config(CredentialContext(access_token="shpat_abc"))


def test_shopify_token_checked_before_domain():
    with pytest.raises(MissingToken):
        resolve_shopify_config(CredentialContext(headers={"x-mkp-shopify-domain": "teststore"}))
