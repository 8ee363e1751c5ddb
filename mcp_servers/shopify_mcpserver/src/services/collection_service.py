import asyncio
import logging

from shared.services.envelope import ServiceResult, ServiceSuccess
from shared.services.provider_service import provider_call
from .shopify_service import ShopifyService
from ..types.shopify_models import (
    CollectionListItem,
    CreateCustomCollectionRequest,
    CreateSmartCollectionRequest,
    ListCollectionsRequest,
)

logger = logging.getLogger(__name__)


class CollectionService(ShopifyService):
    """Custom (manual) and smart (rule-based) collections."""

    @provider_call("create custom collection")
    async def create_custom_collection(self, request: CreateCustomCollectionRequest) -> ServiceResult:
        response = await self._request(
            "POST",
            self.url("custom_collections.json"),
            json={"custom_collection": request.model_dump(exclude_none=True)},
        )
        return ServiceSuccess(data=response.json()["custom_collection"])

    @provider_call("create smart collection")
    async def create_smart_collection(self, request: CreateSmartCollectionRequest) -> ServiceResult:
        response = await self._request(
            "POST",
            self.url("smart_collections.json"),
            json={"smart_collection": request.model_dump(exclude_none=True)},
        )
        return ServiceSuccess(data=response.json()["smart_collection"])

    @provider_call("list collections")
    async def list_collections(self, request: ListCollectionsRequest) -> ServiceResult:
        """
        Shopify keeps custom and smart collections behind separate endpoints.
        Both are fetched concurrently and merged, custom first.
        """
        params = {"limit": request.limit}
        custom_response, smart_response = await asyncio.gather(
            self._send("GET", self.url("custom_collections.json"), params=params),
            self._send("GET", self.url("smart_collections.json"), params=params),
        )

        if not custom_response.is_success:
            return self.failure_from_response("fetch custom collections", custom_response)
        if not smart_response.is_success:
            return self.failure_from_response("fetch smart collections", smart_response)

        custom = custom_response.json().get("custom_collections") or []
        smart = smart_response.json().get("smart_collections") or []
        logger.info(f"Found {len(custom)} custom collections and {len(smart)} smart collections")

        collections = [
            CollectionListItem(collection_id=c["id"], title=c["title"], handle=c.get("handle"))
            for c in custom + smart
        ]
        return ServiceSuccess(data=[c.model_dump() for c in collections])
