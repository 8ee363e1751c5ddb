import sys
import os
import json
import httpx
import pytest

# Add project root to the Python path to allow for correct module imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../../..')))

from shared.auth.credentials import ShopifyConfig
from mcp_servers.shopify_mcpserver.src.services.collection_service import CollectionService
from mcp_servers.shopify_mcpserver.src.services.customer_service import CustomerService
from mcp_servers.shopify_mcpserver.src.services.fulfillment_service import FulfillmentService
from mcp_servers.shopify_mcpserver.src.services.order_service import OrderService
from mcp_servers.shopify_mcpserver.src.services.product_service import ProductService
from mcp_servers.shopify_mcpserver.src.types.shopify_models import (
    CreateCustomerRequest,
    CreateFulfillmentRequest,
    GetOrderInfoRequest,
    ListCollectionsRequest,
    ListCustomersRequest,
    ListProductsRequest,
    TrackingInfo,
)

CONFIG = ShopifyConfig(access_token="shpat_test", shop_domain="teststore.myshopify.com")
BASE = "https://teststore.myshopify.com/admin/api/2025-10"


def make_client(handler, requests=None):
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)
    return httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))


@pytest.mark.asyncio
async def test_create_customer_success():
    requests = []

    def handler(request):
        return httpx.Response(201, json={"customer": {
            "id": 207119551,
            "email": "a@b.com",
            "first_name": None,
            "last_name": None,
            "phone": None,
            "created_at": "2025-01-10T11:00:00-05:00",
            "orders_count": 0,
        }})

    service = CustomerService(CONFIG, http_client=make_client(handler, requests))
    result = await service.create_customer(CreateCustomerRequest(email="a@b.com"))

    assert result.model_dump() == {
        "success": True,
        "data": {
            "customer_id": 207119551,
            "created_at": "2025-01-10T11:00:00-05:00",
            "email": "a@b.com",
            "first_name": None,
            "last_name": None,
            "phone": None,
        },
    }
    assert str(requests[0].url) == f"{BASE}/customers.json"
    assert requests[0].headers["X-Shopify-Access-Token"] == "shpat_test"
    assert json.loads(requests[0].content) == {"customer": {"email": "a@b.com"}}


@pytest.mark.asyncio
async def test_create_customer_duplicate_email_surfaces_provider_errors():
    def handler(request):
        return httpx.Response(422, json={"errors": {"email": ["has already been taken"]}})

    service = CustomerService(CONFIG, http_client=make_client(handler))
    result = await service.create_customer(CreateCustomerRequest(email="a@b.com"))

    assert result.model_dump() == {
        "success": False,
        "error": "Failed to create customer: Unprocessable Entity",
        "details": '{"email":["has already been taken"]}',
    }


@pytest.mark.asyncio
async def test_error_without_errors_field_uses_unknown_details():
    def handler(request):
        return httpx.Response(500, text="oops")

    service = CustomerService(CONFIG, http_client=make_client(handler))
    result = await service.list_customers(ListCustomersRequest())

    assert result.success is False
    assert result.error == "Failed to list customers: Internal Server Error"
    assert result.details == "Unknown error occurred"


@pytest.mark.asyncio
async def test_transport_error_becomes_failure():
    def handler(request):
        raise httpx.ConnectError("Connection refused")

    service = ProductService(CONFIG, http_client=make_client(handler))
    result = await service.list_products(ListProductsRequest())

    assert result.success is False
    assert result.error == "Connection refused"
    assert result.details == "An unexpected error occurred while trying to list products"


@pytest.mark.asyncio
async def test_list_customers_uses_search_endpoint_for_query():
    requests = []

    def handler(request):
        return httpx.Response(200, json={"customers": [
            {"id": 1, "first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com", "phone": None, "state": "enabled"},
        ]})

    service = CustomerService(CONFIG, http_client=make_client(handler, requests))
    result = await service.list_customers(ListCustomersRequest(limit=5, query="email:ada@example.com"))

    assert requests[0].url.path == "/admin/api/2025-10/customers/search.json"
    assert requests[0].url.params["query"] == "email:ada@example.com"
    assert requests[0].url.params["limit"] == "5"
    assert result.data == [
        {"id": 1, "first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com", "phone": None},
    ]


@pytest.mark.asyncio
async def test_list_products_reshapes_items():
    requests = []

    def handler(request):
        return httpx.Response(200, json={"products": [
            {
                "id": 1,
                "title": "Tracked",
                "handle": "tracked",
                "variants": [{"price": "19.99", "inventory_quantity": 0, "inventory_management": "shopify"}],
                "images": [{"src": "https://cdn.example.com/1.png"}],
            },
            {
                "id": 2,
                "title": "Untracked",
                "handle": "untracked",
                "variants": [{"price": "5.00", "inventory_quantity": 0, "inventory_management": None}],
                "images": [],
                "image": {"src": "https://cdn.example.com/2.png"},
            },
            {"id": 3, "title": "Bare", "handle": "bare", "variants": []},
        ]})

    service = ProductService(CONFIG, http_client=make_client(handler, requests))
    result = await service.list_products(ListProductsRequest(collection_id="42", query="shirt"))

    params = requests[0].url.params
    assert params["limit"] == "50"
    assert params["collection_id"] == "42"
    assert params["title"] == "shirt"

    first, second, third = result.data
    assert first == {
        "id": 1,
        "title": "Tracked",
        "price": "19.99",
        "image": "https://cdn.example.com/1.png",
        "available": False,
        "url": "https://teststore.myshopify.com/products/tracked",
    }
    assert second["available"] is True
    assert second["image"] == "https://cdn.example.com/2.png"
    assert third["price"] == "0.00"
    assert third["image"] is None
    assert third["available"] is False


@pytest.mark.asyncio
async def test_list_collections_merges_custom_before_smart():
    def handler(request):
        if request.url.path.endswith("custom_collections.json"):
            return httpx.Response(200, json={"custom_collections": [
                {"id": 1, "title": "Summer", "handle": "summer", "body_html": ""},
                {"id": 2, "title": "Winter", "handle": "winter"},
            ]})
        return httpx.Response(200, json={"smart_collections": [
            {"id": 3, "title": "On sale", "handle": "on-sale", "rules": []},
        ]})

    service = CollectionService(CONFIG, http_client=make_client(handler))
    result = await service.list_collections(ListCollectionsRequest())

    assert result.success is True
    assert result.data == [
        {"collection_id": 1, "title": "Summer", "handle": "summer"},
        {"collection_id": 2, "title": "Winter", "handle": "winter"},
        {"collection_id": 3, "title": "On sale", "handle": "on-sale"},
    ]


@pytest.mark.asyncio
async def test_list_collections_surfaces_custom_failure():
    def handler(request):
        if request.url.path.endswith("custom_collections.json"):
            return httpx.Response(401, json={"errors": "[API] Invalid API key or access token"})
        return httpx.Response(200, json={"smart_collections": []})

    service = CollectionService(CONFIG, http_client=make_client(handler))
    result = await service.list_collections(ListCollectionsRequest())

    assert result.model_dump() == {
        "success": False,
        "error": "Failed to fetch custom collections: Unauthorized",
        "details": '"[API] Invalid API key or access token"',
    }


@pytest.mark.asyncio
async def test_list_collections_prefers_custom_failure_when_both_fail():
    def handler(request):
        if request.url.path.endswith("custom_collections.json"):
            return httpx.Response(403, json={"errors": "custom denied"})
        return httpx.Response(500, json={"errors": "smart broken"})

    service = CollectionService(CONFIG, http_client=make_client(handler))
    result = await service.list_collections(ListCollectionsRequest())

    assert result.error == "Failed to fetch custom collections: Forbidden"


@pytest.mark.asyncio
async def test_list_collections_surfaces_smart_failure():
    def handler(request):
        if request.url.path.endswith("custom_collections.json"):
            return httpx.Response(200, json={"custom_collections": []})
        return httpx.Response(500, json={"errors": "smart broken"})

    service = CollectionService(CONFIG, http_client=make_client(handler))
    result = await service.list_collections(ListCollectionsRequest())

    assert result.error == "Failed to fetch smart collections: Internal Server Error"


@pytest.mark.asyncio
async def test_get_order_info_requires_an_identifier():
    service = OrderService(CONFIG, http_client=make_client(lambda request: httpx.Response(500)))
    result = await service.get_order_info(GetOrderInfoRequest())

    assert result.success is False
    assert result.error == "Either order_id or order_number is required"


@pytest.mark.asyncio
async def test_get_order_info_by_number_searches_then_fetches():
    requests = []

    def handler(request):
        if request.url.path.endswith("/orders.json"):
            return httpx.Response(200, json={"orders": [{"id": 450789469}]})
        return httpx.Response(200, json={"order": {
            "id": 450789469,
            "order_number": 1001,
            "name": "#1001",
            "created_at": "2025-01-10T11:00:00-05:00",
            "financial_status": "paid",
            "fulfillment_status": None,
            "total_price": "59.00",
            "line_items": [{"id": 1, "variant_id": 2, "product_id": 3, "title": "Shirt", "quantity": 2, "price": "29.50", "sku": "SH-1"}],
            "fulfillments": [{"id": 9, "status": "success", "tracking_number": "1Z999"}],
            "customer": {"id": 5, "email": "ada@example.com", "first_name": "Ada", "last_name": "Lovelace"},
        }})

    service = OrderService(CONFIG, http_client=make_client(handler, requests))
    result = await service.get_order_info(GetOrderInfoRequest(order_number="1001"))

    assert requests[0].url.params["name"] == "#1001"
    assert requests[0].url.params["status"] == "any"
    assert requests[1].url.path == "/admin/api/2025-10/orders/450789469.json"

    assert result.success is True
    assert result.data["order_id"] == 450789469
    assert result.data["status"] == "paid"
    assert result.data["line_items"][0]["quantity"] == 2
    assert result.data["tracking_info"][0]["tracking_number"] == "1Z999"
    assert result.data["customer"]["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_get_order_info_unknown_number():
    def handler(request):
        return httpx.Response(200, json={"orders": []})

    service = OrderService(CONFIG, http_client=make_client(handler))
    result = await service.get_order_info(GetOrderInfoRequest(order_number="9999"))

    assert result.model_dump() == {
        "success": False,
        "error": "Order not found",
        "details": "No order found with order_number: 9999",
    }


@pytest.mark.asyncio
async def test_create_fulfillment_omits_empty_tracking():
    requests = []

    def handler(request):
        return httpx.Response(201, json={"fulfillment": {"id": 1, "status": "success"}})

    service = FulfillmentService(CONFIG, http_client=make_client(handler, requests))
    result = await service.create_fulfillment(
        CreateFulfillmentRequest(fulfillment_order_id=1046000778, tracking_info=TrackingInfo())
    )

    assert result.success is True
    assert json.loads(requests[0].content) == {
        "fulfillment": {"line_items_by_fulfillment_order": [{"fulfillment_order_id": 1046000778}]}
    }


@pytest.mark.asyncio
async def test_list_products_image_falls_back_when_first_image_has_no_src():
    def handler(request):
        return httpx.Response(200, json={"products": [{
            "id": 4,
            "title": "Pending upload",
            "handle": "pending-upload",
            "variants": [],
            "images": [{"id": 99}],
            "image": {"src": "https://cdn.example.com/4.png"},
        }]})

    service = ProductService(CONFIG, http_client=make_client(handler))
    result = await service.list_products(ListProductsRequest())

    assert result.data[0]["image"] == "https://cdn.example.com/4.png"


@pytest.mark.asyncio
async def test_list_products_unexpected_body_shape_returns_failure():
    service = ProductService(CONFIG, http_client=make_client(lambda request: httpx.Response(200, json=[])))

    result = await service.list_products(ListProductsRequest())

    assert result.success is False
    assert result.details == "An unexpected error occurred while trying to list products"
