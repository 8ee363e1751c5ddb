"""
Shopify tools for the MCP server.

Each tool resolves the store credentials from the request headers, calls one
service operation and returns a single text block: the JSON payload on success
or a readable error message otherwise.
"""

import logging
from typing import List, Literal, Optional, Union

from shared.services.tool_runner import run_tool
from ..mcp_builder import mcp_builder
from ..dependencies import get_shopify_config
from ..services.product_service import ProductService
from ..services.collection_service import CollectionService
from ..services.order_service import OrderService
from ..services.customer_service import CustomerService
from ..services.fulfillment_service import FulfillmentService
from ..types.shopify_models import (
    AddressInput,
    CancelFulfillmentRequest,
    CollectInput,
    CollectionImageInput,
    CreateCustomCollectionRequest,
    CreateCustomerRequest,
    CreateDraftOrderRequest,
    CreateFulfillmentRequest,
    CreateOrderRequest,
    CreateProductRequest,
    CreateSmartCollectionRequest,
    DraftOrderLineItemInput,
    GetOrderInfoRequest,
    GetProductInfoRequest,
    ListCollectionsRequest,
    ListCustomersRequest,
    ListProductsRequest,
    OrderCustomerInput,
    OrderLineItemInput,
    ProductImageInput,
    ProductOptionInput,
    ProductVariantInput,
    SmartCollectionRule,
    SortOrder,
    TrackingInfo,
    UpdateFulfillmentTrackingRequest,
)

logger = logging.getLogger(__name__)

# --- Products ---

@mcp_builder.tool()
async def create_product(
    title: str,
    body_html: Optional[str] = None,
    vendor: Optional[str] = None,
    product_type: Optional[str] = None,
    tags: Optional[str] = None,
    status: Optional[Literal["active", "draft", "archived"]] = None,
    variants: Optional[List[ProductVariantInput]] = None,
    images: Optional[List[ProductImageInput]] = None,
    options: Optional[List[ProductOptionInput]] = None,
    published_scope: Optional[str] = None,
) -> str:
    """
    Creates a new product in the Shopify store, with optional variants, images and options.
    `tags` is a comma-separated list. `status` defaults to active on Shopify's side.
    """
    return await run_tool(
        "create_product",
        lambda: ProductService(get_shopify_config()),
        lambda service: service.create_product(CreateProductRequest(
            title=title,
            body_html=body_html,
            vendor=vendor,
            product_type=product_type,
            tags=tags,
            status=status,
            variants=variants,
            images=images,
            options=options,
            published_scope=published_scope,
        )),
    )

@mcp_builder.tool()
async def list_products(limit: int = 50, collection_id: Optional[str] = None, query: Optional[str] = None) -> str:
    """
    Lists products with their price, main image, availability and storefront URL.
    Can be filtered by collection ID and by a title search query.
    """
    return await run_tool(
        "list_products",
        lambda: ProductService(get_shopify_config()),
        lambda service: service.list_products(
            ListProductsRequest(limit=limit, collection_id=collection_id, query=query)
        ),
    )

@mcp_builder.tool()
async def get_product_info(product_id: str) -> str:
    """
    Gets the full details of a product: description, variants, images, total inventory, vendor, type and tags.
    """
    return await run_tool(
        "get_product_info",
        lambda: ProductService(get_shopify_config()),
        lambda service: service.get_product_info(GetProductInfoRequest(product_id=product_id)),
    )

# --- Collections ---

@mcp_builder.tool()
async def create_custom_collection(
    title: str,
    body_html: Optional[str] = None,
    handle: Optional[str] = None,
    image: Optional[CollectionImageInput] = None,
    published: Optional[bool] = None,
    sort_order: Optional[SortOrder] = None,
    template_suffix: Optional[str] = None,
    collects: Optional[List[CollectInput]] = None,
) -> str:
    """
    Creates a custom (manual) collection. Products are added explicitly through `collects`.
    """
    return await run_tool(
        "create_custom_collection",
        lambda: CollectionService(get_shopify_config()),
        lambda service: service.create_custom_collection(CreateCustomCollectionRequest(
            title=title,
            body_html=body_html,
            handle=handle,
            image=image,
            published=published,
            sort_order=sort_order,
            template_suffix=template_suffix,
            collects=collects,
        )),
    )

@mcp_builder.tool()
async def create_smart_collection(
    title: str,
    rules: List[SmartCollectionRule],
    body_html: Optional[str] = None,
    handle: Optional[str] = None,
    image: Optional[CollectionImageInput] = None,
    disjunctive: Optional[bool] = None,
    sort_order: Optional[SortOrder] = None,
    template_suffix: Optional[str] = None,
    published: Optional[bool] = None,
    published_scope: Optional[str] = None,
) -> str:
    """
    Creates a smart (automatic) collection whose products are selected by rules.
    With `disjunctive` false all rules must match, with true any rule matches.
    """
    return await run_tool(
        "create_smart_collection",
        lambda: CollectionService(get_shopify_config()),
        lambda service: service.create_smart_collection(CreateSmartCollectionRequest(
            title=title,
            rules=rules,
            body_html=body_html,
            handle=handle,
            image=image,
            disjunctive=disjunctive,
            sort_order=sort_order,
            template_suffix=template_suffix,
            published=published,
            published_scope=published_scope,
        )),
    )

@mcp_builder.tool()
async def list_collections(limit: int = 50) -> str:
    """Lists all custom and smart collections of the store."""
    return await run_tool(
        "list_collections",
        lambda: CollectionService(get_shopify_config()),
        lambda service: service.list_collections(ListCollectionsRequest(limit=limit)),
    )

# --- Orders ---

@mcp_builder.tool()
async def create_order(
    line_items: List[OrderLineItemInput],
    customer: Optional[OrderCustomerInput] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    shipping_address: Optional[AddressInput] = None,
    billing_address: Optional[AddressInput] = None,
    financial_status: Optional[
        Literal["pending", "authorized", "partially_paid", "paid", "partially_refunded", "refunded", "voided"]
    ] = None,
    send_receipt: Optional[bool] = None,
    note: Optional[str] = None,
    tags: Optional[str] = None,
) -> str:
    """
    Creates an order. Each line item needs a quantity and either a variant_id or a title and price.
    """
    return await run_tool(
        "create_order",
        lambda: OrderService(get_shopify_config()),
        lambda service: service.create_order(CreateOrderRequest(
            line_items=line_items,
            customer=customer,
            email=email,
            phone=phone,
            shipping_address=shipping_address,
            billing_address=billing_address,
            financial_status=financial_status,
            send_receipt=send_receipt,
            note=note,
            tags=tags,
        )),
    )

@mcp_builder.tool()
async def create_draft_order(
    line_items: List[DraftOrderLineItemInput],
    customer_id: Optional[int] = None,
    email: Optional[str] = None,
    shipping_address: Optional[AddressInput] = None,
    note: Optional[str] = None,
    tags: Optional[str] = None,
) -> str:
    """
    Creates a draft order, e.g. to send an invoice before payment.
    Custom line items need a title and a price.
    """
    return await run_tool(
        "create_draft_order",
        lambda: OrderService(get_shopify_config()),
        lambda service: service.create_draft_order(CreateDraftOrderRequest(
            line_items=line_items,
            customer={"id": customer_id} if customer_id else None,
            email=email,
            shipping_address=shipping_address,
            note=note,
            tags=tags,
        )),
    )

@mcp_builder.tool()
async def get_order_info(order_id: Optional[str] = None, order_number: Optional[str] = None) -> str:
    """
    Gets an order's status, line items, totals, customer and tracking information.
    Provide either the order ID or the order number (e.g. 1001).
    """
    return await run_tool(
        "get_order_info",
        lambda: OrderService(get_shopify_config()),
        lambda service: service.get_order_info(GetOrderInfoRequest(order_id=order_id, order_number=order_number)),
    )

# --- Customers ---

@mcp_builder.tool()
async def list_customers(limit: int = 50, query: Optional[str] = None) -> str:
    """
    Lists customers. `query` filters with Shopify's search syntax, e.g. 'email:customer@example.com'.
    """
    return await run_tool(
        "list_customers",
        lambda: CustomerService(get_shopify_config()),
        lambda service: service.list_customers(ListCustomersRequest(limit=limit, query=query)),
    )

@mcp_builder.tool()
async def create_customer(
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    addresses: Optional[List[AddressInput]] = None,
    note: Optional[str] = None,
    tags: Optional[str] = None,
) -> str:
    """
    Creates a customer. Email and phone (E.164) must be unique within the store.
    """
    return await run_tool(
        "create_customer",
        lambda: CustomerService(get_shopify_config()),
        lambda service: service.create_customer(CreateCustomerRequest(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            addresses=addresses,
            note=note,
            tags=tags,
        )),
    )

# --- Fulfillments ---

@mcp_builder.tool()
async def create_fulfillment(
    fulfillment_order_id: int,
    tracking_company: Optional[str] = None,
    tracking_number: Optional[str] = None,
    tracking_url: Optional[str] = None,
    notify_customer: Optional[bool] = None,
) -> str:
    """
    Fulfills a fulfillment order, optionally with carrier tracking information.
    """
    return await run_tool(
        "create_fulfillment",
        lambda: FulfillmentService(get_shopify_config()),
        lambda service: service.create_fulfillment(CreateFulfillmentRequest(
            fulfillment_order_id=fulfillment_order_id,
            tracking_info=TrackingInfo(company=tracking_company, number=tracking_number, url=tracking_url),
            notify_customer=notify_customer,
        )),
    )

@mcp_builder.tool()
async def update_fulfillment_tracking(
    fulfillment_id: Union[int, str],
    tracking_company: Optional[str] = None,
    tracking_number: Optional[str] = None,
    tracking_url: Optional[str] = None,
    notify_customer: Optional[bool] = None,
) -> str:
    """Updates the carrier tracking information of an existing fulfillment."""
    return await run_tool(
        "update_fulfillment_tracking",
        lambda: FulfillmentService(get_shopify_config()),
        lambda service: service.update_fulfillment_tracking(UpdateFulfillmentTrackingRequest(
            fulfillment_id=fulfillment_id,
            tracking_info=TrackingInfo(company=tracking_company, number=tracking_number, url=tracking_url),
            notify_customer=notify_customer,
        )),
    )

@mcp_builder.tool()
async def cancel_fulfillment(fulfillment_id: Union[int, str]) -> str:
    """Cancels a fulfillment."""
    return await run_tool(
        "cancel_fulfillment",
        lambda: FulfillmentService(get_shopify_config()),
        lambda service: service.cancel_fulfillment(CancelFulfillmentRequest(fulfillment_id=fulfillment_id)),
    )
