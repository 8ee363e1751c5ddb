import logging
from typing import Any, Dict

from shared.services.envelope import ServiceFailure, ServiceResult, ServiceSuccess
from shared.services.provider_service import provider_call
from .shopify_service import ShopifyService
from ..types.shopify_models import (
    CreateProductRequest,
    GetProductInfoRequest,
    ListProductsRequest,
    ProductDetailInfo,
    ProductImageInfo,
    ProductListItem,
    ProductVariantInfo,
)

logger = logging.getLogger(__name__)


def _variant_available(variant: Dict[str, Any]) -> bool:
    """A variant is sellable when it has stock or its inventory is not tracked."""
    return (variant.get("inventory_quantity") or 0) > 0 or variant.get("inventory_management") is None


class ProductService(ShopifyService):

    @provider_call("create product")
    async def create_product(self, request: CreateProductRequest) -> ServiceResult:
        logger.info(f"Creating product '{request.title}'")
        response = await self._request(
            "POST", self.url("products.json"), json={"product": request.model_dump(exclude_none=True)}
        )
        product = response.json()["product"]
        logger.info(f"Product created successfully: {product.get('id')}")
        return ServiceSuccess(data=product)

    @provider_call("list products")
    async def list_products(self, request: ListProductsRequest) -> ServiceResult:
        params: Dict[str, Any] = {"limit": request.limit}
        if request.collection_id:
            params["collection_id"] = request.collection_id
        if request.query:
            # The Admin API searches products by the title parameter
            params["title"] = request.query

        response = await self._request("GET", self.url("products.json"), params=params)
        products = response.json().get("products") or []
        logger.info(f"Found {len(products)} products")

        items = []
        for product in products:
            variants = product.get("variants") or []
            images = product.get("images") or []
            image = (images[0].get("src") if images else None) or (product.get("image") or {}).get("src")
            items.append(ProductListItem(
                id=product["id"],
                title=product["title"],
                price=(variants[0].get("price") if variants else None) or "0.00",
                image=image,
                available=any(_variant_available(v) for v in variants),
                url=self.storefront_url(product.get("handle", "")),
            ))
        return ServiceSuccess(data=[item.model_dump() for item in items])

    @provider_call("get product info")
    async def get_product_info(self, request: GetProductInfoRequest) -> ServiceResult:
        response = await self._request("GET", self.url(f"products/{request.product_id}.json"))
        product = response.json().get("product")
        if not product:
            return ServiceFailure(error="Product not found", details=f"No product found with ID: {request.product_id}")

        variants = [
            ProductVariantInfo(
                id=v["id"],
                title=v.get("title"),
                price=v.get("price"),
                sku=v.get("sku"),
                inventory_quantity=v.get("inventory_quantity"),
                available=_variant_available(v),
                option1=v.get("option1"),
                option2=v.get("option2"),
                option3=v.get("option3"),
                weight=v.get("weight"),
                weight_unit=v.get("weight_unit"),
                compare_at_price=v.get("compare_at_price"),
            )
            for v in product.get("variants") or []
        ]
        images = [
            ProductImageInfo(id=i["id"], src=i["src"], alt=i.get("alt") or None, position=i.get("position"))
            for i in product.get("images") or []
        ]
        tags = [tag.strip() for tag in product["tags"].split(",")] if product.get("tags") else []

        detail = ProductDetailInfo(
            id=product["id"],
            title=product["title"],
            description=product.get("body_html") or "",
            variants=variants,
            price=(variants[0].price if variants else None) or "0.00",
            inventory=sum(v.inventory_quantity or 0 for v in variants),
            images=images,
            vendor=product.get("vendor"),
            product_type=product.get("product_type"),
            tags=tags,
            url=self.storefront_url(product.get("handle", "")),
        )
        return ServiceSuccess(data=detail.model_dump())
