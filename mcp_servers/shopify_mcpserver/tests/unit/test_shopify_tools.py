import sys
import os
import json
from unittest.mock import patch, AsyncMock
import pytest

# Add project root to the Python path to allow for correct module imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../../..')))

from shared.services.envelope import ServiceFailure, ServiceSuccess
from mcp_servers.shopify_mcpserver.src.tools.shopify import create_customer, get_order_info, list_collections

TOOLS = 'mcp_servers.shopify_mcpserver.src.tools.shopify'


@pytest.mark.asyncio
async def test_tool_returns_auth_error_without_calling_shopify():
    headers = {"authorization": "Bearer shpat_test"}
    with patch('mcp_servers.shopify_mcpserver.src.dependencies.get_http_headers', return_value=headers), \
         patch(f'{TOOLS}.CustomerService') as mock_service_cls:
        result = await create_customer.fn(email="a@b.com")

    assert result == "Shopify domain is required. Please provide the shop domain in the x-mkp-shopify-domain header."
    mock_service_cls.assert_not_called()


@pytest.mark.asyncio
async def test_tool_returns_auth_url_for_invalid_context():
    headers = {
        "x-auth-valid": "false",
        "x-auth-url": "https://auth.example.com/authorize?state=abc",
    }
    with patch('mcp_servers.shopify_mcpserver.src.dependencies.get_http_headers', return_value=headers):
        result = await list_collections.fn()

    assert "https://auth.example.com/authorize?state=abc" in result


@pytest.mark.asyncio
async def test_create_customer_tool_success_returns_json():
    headers = {"authorization": "Bearer shpat_test", "x-mkp-shopify-domain": "https://teststore.myshopify.com/"}
    data = {"customer_id": 1, "created_at": None, "email": "a@b.com", "first_name": "Ada", "last_name": None, "phone": None}

    with patch('mcp_servers.shopify_mcpserver.src.dependencies.get_http_headers', return_value=headers), \
         patch(f'{TOOLS}.CustomerService') as mock_service_cls:
        mock_service = mock_service_cls.return_value
        mock_service.create_customer = AsyncMock(return_value=ServiceSuccess(data=data))

        result = await create_customer.fn(email="a@b.com", first_name="Ada")

    config = mock_service_cls.call_args.args[0]
    assert config.shop_domain == "teststore.myshopify.com"
    assert config.access_token == "shpat_test"

    request = mock_service.create_customer.call_args.args[0]
    assert request.email == "a@b.com"
    assert request.first_name == "Ada"
    assert json.loads(result) == data


@pytest.mark.asyncio
async def test_tool_failure_text_includes_details():
    with patch(f'{TOOLS}.get_shopify_config'), \
         patch(f'{TOOLS}.OrderService') as mock_service_cls:
        mock_service_cls.return_value.get_order_info = AsyncMock(
            return_value=ServiceFailure(error="Order not found", details="No order found with order_number: 9999")
        )
        result = await get_order_info.fn(order_number="9999")

    assert result == "Order not found. Details: No order found with order_number: 9999"


@pytest.mark.asyncio
async def test_tool_failure_text_without_details():
    with patch(f'{TOOLS}.get_shopify_config'), \
         patch(f'{TOOLS}.CollectionService') as mock_service_cls:
        mock_service_cls.return_value.list_collections = AsyncMock(
            return_value=ServiceFailure(error="Connection refused")
        )
        result = await list_collections.fn(limit=10)

    assert result == "Connection refused. Details: No additional details"
