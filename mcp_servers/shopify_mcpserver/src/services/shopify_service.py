"""
Base client for the Shopify Admin REST API.

All Shopify wrappers share the store base URL, the static access-token header
and the way Shopify reports errors: a JSON body with an `errors` field that may
be a string, a list or a field-to-messages mapping.
"""

import json
import logging
from typing import Dict, Optional

import httpx

from shared.auth.credentials import ShopifyConfig
from shared.services.envelope import UNKNOWN_ERROR_DETAILS
from shared.services.provider_service import ProviderService

logger = logging.getLogger(__name__)


class ShopifyService(ProviderService):
    def __init__(self, config: ShopifyConfig, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(http_client)
        self.config = config
        self.base_url = f"https://{config.shop_domain}/admin/api/{config.api_version}"

    async def _get_auth_headers(self) -> Dict[str, str]:
        return {
            "X-Shopify-Access-Token": self.config.access_token,
            "Content-Type": "application/json",
        }

    def error_details(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return UNKNOWN_ERROR_DETAILS
        if isinstance(body, dict) and body.get("errors"):
            return json.dumps(body["errors"], separators=(",", ":"), ensure_ascii=False)
        return UNKNOWN_ERROR_DETAILS

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def storefront_url(self, handle: str) -> str:
        return f"https://{self.config.shop_domain}/products/{handle}"
