import logging
from typing import Any, Dict

from shared.services.envelope import ServiceResult, ServiceSuccess
from shared.services.provider_service import provider_call
from .shopify_service import ShopifyService
from ..types.shopify_models import (
    CancelFulfillmentRequest,
    CreateFulfillmentRequest,
    FulfillmentUpdate,
    UpdateFulfillmentTrackingRequest,
)

logger = logging.getLogger(__name__)


class FulfillmentService(ShopifyService):
    """
    Fulfillments are created against fulfillment orders. A created fulfillment
    is never rolled back when a later tracking update fails.
    """

    @provider_call("create fulfillment")
    async def create_fulfillment(self, request: CreateFulfillmentRequest) -> ServiceResult:
        fulfillment: Dict[str, Any] = {
            "line_items_by_fulfillment_order": [{"fulfillment_order_id": request.fulfillment_order_id}],
        }
        if request.tracking_info and (
            request.tracking_info.company or request.tracking_info.number or request.tracking_info.url
        ):
            fulfillment["tracking_info"] = request.tracking_info.model_dump(exclude_none=True)
        if request.notify_customer is not None:
            fulfillment["notify_customer"] = request.notify_customer

        response = await self._request("POST", self.url("fulfillments.json"), json={"fulfillment": fulfillment})
        return ServiceSuccess(data=response.json()["fulfillment"])

    @provider_call("update fulfillment tracking")
    async def update_fulfillment_tracking(self, request: UpdateFulfillmentTrackingRequest) -> ServiceResult:
        body: Dict[str, Any] = {"tracking_info": request.tracking_info.model_dump(exclude_none=True)}
        if request.notify_customer is not None:
            body["notify_customer"] = request.notify_customer

        response = await self._request(
            "POST", self.url(f"fulfillments/{request.fulfillment_id}/update_tracking.json"), json={"fulfillment": body}
        )
        fulfillment = response.json()["fulfillment"]
        update = FulfillmentUpdate(
            status=fulfillment.get("status"),
            tracking_company=fulfillment.get("tracking_company"),
            tracking_number=fulfillment.get("tracking_number"),
            tracking_url=fulfillment.get("tracking_url"),
        )
        return ServiceSuccess(data=update.model_dump())

    @provider_call("cancel fulfillment")
    async def cancel_fulfillment(self, request: CancelFulfillmentRequest) -> ServiceResult:
        response = await self._request("POST", self.url(f"fulfillments/{request.fulfillment_id}/cancel.json"))
        fulfillment = response.json()["fulfillment"]
        return ServiceSuccess(data={"updated": True, "status": fulfillment.get("status")})
