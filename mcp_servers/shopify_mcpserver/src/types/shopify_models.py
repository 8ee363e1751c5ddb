from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

SortOrder = Literal[
    "alpha-asc", "alpha-desc", "best-selling", "created", "created-desc", "manual", "price-asc", "price-desc"
]

# --- Products ---

class ProductVariantInput(BaseModel):
    price: Optional[str] = None
    sku: Optional[str] = None
    inventory_quantity: Optional[int] = None
    inventory_management: Optional[str] = None
    inventory_policy: Optional[str] = None
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None
    requires_shipping: Optional[bool] = None
    barcode: Optional[str] = None
    compare_at_price: Optional[str] = None
    fulfillment_service: Optional[str] = None
    taxable: Optional[bool] = None
    grams: Optional[int] = None


class ProductImageInput(BaseModel):
    src: str
    alt: Optional[str] = None
    position: Optional[int] = None


class ProductOptionInput(BaseModel):
    name: str
    values: List[str]


class CreateProductRequest(BaseModel):
    title: str
    body_html: Optional[str] = None
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    tags: Optional[str] = None
    status: Optional[Literal["active", "draft", "archived"]] = None
    variants: Optional[List[ProductVariantInput]] = None
    images: Optional[List[ProductImageInput]] = None
    options: Optional[List[ProductOptionInput]] = None
    published_scope: Optional[str] = None


class ListProductsRequest(BaseModel):
    limit: int = 50
    collection_id: Optional[str] = None
    query: Optional[str] = None


class GetProductInfoRequest(BaseModel):
    product_id: str


class ProductListItem(BaseModel):
    id: int
    title: str
    price: str
    image: Optional[str] = None
    available: bool
    url: str


class ProductVariantInfo(BaseModel):
    id: int
    title: Optional[str] = None
    price: Optional[str] = None
    sku: Optional[str] = None
    inventory_quantity: Optional[int] = None
    available: bool
    option1: Optional[str] = None
    option2: Optional[str] = None
    option3: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None
    compare_at_price: Optional[str] = None


class ProductImageInfo(BaseModel):
    id: int
    src: str
    alt: Optional[str] = None
    position: Optional[int] = None


class ProductDetailInfo(BaseModel):
    id: int
    title: str
    description: str
    variants: List[ProductVariantInfo]
    price: str
    inventory: int
    images: List[ProductImageInfo]
    vendor: Optional[str] = None
    product_type: Optional[str] = None
    tags: List[str]
    url: str

# --- Collections ---

class CollectionImageInput(BaseModel):
    src: Optional[str] = None
    alt: Optional[str] = None
    attachment: Optional[str] = Field(default=None, description="Base64 encoded image data")


class CollectInput(BaseModel):
    product_id: int


class SmartCollectionRule(BaseModel):
    column: str
    relation: str
    condition: str
    condition_object_id: Optional[str] = None


class CreateCustomCollectionRequest(BaseModel):
    title: str = Field(max_length=255)
    body_html: Optional[str] = None
    handle: Optional[str] = None
    image: Optional[CollectionImageInput] = None
    published: Optional[bool] = None
    sort_order: Optional[SortOrder] = None
    template_suffix: Optional[str] = None
    collects: Optional[List[CollectInput]] = None


class CreateSmartCollectionRequest(BaseModel):
    title: str = Field(max_length=255)
    rules: List[SmartCollectionRule]
    body_html: Optional[str] = None
    handle: Optional[str] = None
    image: Optional[CollectionImageInput] = None
    disjunctive: Optional[bool] = None
    sort_order: Optional[SortOrder] = None
    template_suffix: Optional[str] = None
    published: Optional[bool] = None
    published_scope: Optional[str] = None


class ListCollectionsRequest(BaseModel):
    limit: int = 50


class CollectionListItem(BaseModel):
    collection_id: int
    title: str
    handle: Optional[str] = None

# --- Orders ---

class OrderLineItemInput(BaseModel):
    variant_id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: int
    price: Optional[str] = None
    title: Optional[str] = None
    sku: Optional[str] = None
    taxable: Optional[bool] = None
    requires_shipping: Optional[bool] = None


class OrderCustomerInput(BaseModel):
    id: Optional[int] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class AddressInput(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None


class CreateOrderRequest(BaseModel):
    line_items: List[OrderLineItemInput]
    customer: Optional[OrderCustomerInput] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    shipping_address: Optional[AddressInput] = None
    billing_address: Optional[AddressInput] = None
    financial_status: Optional[
        Literal["pending", "authorized", "partially_paid", "paid", "partially_refunded", "refunded", "voided"]
    ] = None
    send_receipt: Optional[bool] = None
    note: Optional[str] = None
    tags: Optional[str] = None


class DraftOrderLineItemInput(BaseModel):
    variant_id: Optional[int] = None
    title: Optional[str] = None
    price: Optional[str] = None
    quantity: int
    taxable: Optional[bool] = None
    requires_shipping: Optional[bool] = None


class CreateDraftOrderRequest(BaseModel):
    line_items: List[DraftOrderLineItemInput]
    customer: Optional[Dict[str, int]] = None
    email: Optional[str] = None
    shipping_address: Optional[AddressInput] = None
    note: Optional[str] = None
    tags: Optional[str] = None


class GetOrderInfoRequest(BaseModel):
    order_id: Optional[str] = None
    order_number: Optional[str] = None


class OrderLineItemInfo(BaseModel):
    id: int
    variant_id: Optional[int] = None
    product_id: Optional[int] = None
    title: Optional[str] = None
    quantity: int
    price: Optional[str] = None
    sku: Optional[str] = None
    fulfillment_status: Optional[str] = None


class OrderFulfillmentInfo(BaseModel):
    id: int
    status: Optional[str] = None
    tracking_company: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class OrderCustomerInfo(BaseModel):
    id: int
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class OrderDetailInfo(BaseModel):
    order_id: int
    order_number: Optional[int] = None
    name: Optional[str] = None
    created_at: Optional[str] = None
    status: Optional[str] = None
    line_items: List[OrderLineItemInfo]
    total_price: Optional[str] = None
    fulfillment_status: Optional[str] = None
    tracking_info: List[OrderFulfillmentInfo]
    customer: Optional[OrderCustomerInfo] = None
    shipping_address: Optional[Dict[str, Any]] = None
    billing_address: Optional[Dict[str, Any]] = None

# --- Customers ---

class ListCustomersRequest(BaseModel):
    limit: int = 50
    query: Optional[str] = None


class CreateCustomerRequest(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    addresses: Optional[List[AddressInput]] = None
    note: Optional[str] = None
    tags: Optional[str] = None


class CustomerListItem(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CreatedCustomer(BaseModel):
    customer_id: int
    created_at: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None

# --- Fulfillments ---

class TrackingInfo(BaseModel):
    company: Optional[str] = None
    number: Optional[str] = None
    url: Optional[str] = None


class CreateFulfillmentRequest(BaseModel):
    fulfillment_order_id: int
    tracking_info: Optional[TrackingInfo] = None
    notify_customer: Optional[bool] = None


class UpdateFulfillmentTrackingRequest(BaseModel):
    fulfillment_id: Union[int, str]
    tracking_info: TrackingInfo
    notify_customer: Optional[bool] = None


class CancelFulfillmentRequest(BaseModel):
    fulfillment_id: Union[int, str]


class FulfillmentUpdate(BaseModel):
    updated: bool = True
    status: Optional[str] = None
    tracking_company: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
