import logging

from shared.services.envelope import ServiceFailure, ServiceResult, ServiceSuccess
from shared.services.provider_service import provider_call
from .shopify_service import ShopifyService
from ..types.shopify_models import (
    CreateDraftOrderRequest,
    CreateOrderRequest,
    GetOrderInfoRequest,
    OrderCustomerInfo,
    OrderDetailInfo,
    OrderFulfillmentInfo,
    OrderLineItemInfo,
)

logger = logging.getLogger(__name__)


class OrderService(ShopifyService):

    @provider_call("create order")
    async def create_order(self, request: CreateOrderRequest) -> ServiceResult:
        response = await self._request(
            "POST", self.url("orders.json"), json={"order": request.model_dump(exclude_none=True)}
        )
        order = response.json()["order"]
        logger.info(f"Order created successfully: {order.get('name')}")
        return ServiceSuccess(data=order)

    @provider_call("create draft order")
    async def create_draft_order(self, request: CreateDraftOrderRequest) -> ServiceResult:
        response = await self._request(
            "POST", self.url("draft_orders.json"), json={"draft_order": request.model_dump(exclude_none=True)}
        )
        return ServiceSuccess(data=response.json()["draft_order"])

    @provider_call("get order info")
    async def get_order_info(self, request: GetOrderInfoRequest) -> ServiceResult:
        """Fetches an order by id, or by its human-facing number (#1001) via a search first."""
        if not request.order_id and not request.order_number:
            return ServiceFailure(
                error="Either order_id or order_number is required",
                details="You must provide at least one identifier to retrieve an order",
            )

        order_id = request.order_id
        if not order_id:
            search = await self._send(
                "GET", self.url("orders.json"), params={"name": f"#{request.order_number}", "status": "any"}
            )
            orders = search.json().get("orders") if search.is_success else None
            if not orders:
                return ServiceFailure(
                    error="Order not found",
                    details=f"No order found with order_number: {request.order_number}",
                )
            order_id = str(orders[0]["id"])

        response = await self._request("GET", self.url(f"orders/{order_id}.json"))
        order = response.json().get("order")
        if not order:
            return ServiceFailure(error="Order not found", details=f"No order found with ID: {order_id}")

        customer = order.get("customer")
        detail = OrderDetailInfo(
            order_id=order["id"],
            order_number=order.get("order_number"),
            name=order.get("name"),
            created_at=order.get("created_at"),
            status=order.get("financial_status"),
            line_items=[
                OrderLineItemInfo(
                    id=item["id"],
                    variant_id=item.get("variant_id"),
                    product_id=item.get("product_id"),
                    title=item.get("title"),
                    quantity=item["quantity"],
                    price=item.get("price"),
                    sku=item.get("sku"),
                    fulfillment_status=item.get("fulfillment_status"),
                )
                for item in order.get("line_items") or []
            ],
            total_price=order.get("total_price"),
            fulfillment_status=order.get("fulfillment_status"),
            tracking_info=[
                OrderFulfillmentInfo(
                    id=f["id"],
                    status=f.get("status"),
                    tracking_company=f.get("tracking_company"),
                    tracking_number=f.get("tracking_number"),
                    tracking_url=f.get("tracking_url"),
                    created_at=f.get("created_at"),
                    updated_at=f.get("updated_at"),
                )
                for f in order.get("fulfillments") or []
            ],
            customer=OrderCustomerInfo(
                id=customer["id"],
                email=customer.get("email"),
                first_name=customer.get("first_name"),
                last_name=customer.get("last_name"),
            ) if customer else None,
            shipping_address=order.get("shipping_address"),
            billing_address=order.get("billing_address"),
        )
        return ServiceSuccess(data=detail.model_dump())
