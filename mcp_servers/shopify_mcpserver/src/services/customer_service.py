import logging

from shared.services.envelope import ServiceResult, ServiceSuccess
from shared.services.provider_service import provider_call
from .shopify_service import ShopifyService
from ..types.shopify_models import CreateCustomerRequest, CreatedCustomer, CustomerListItem, ListCustomersRequest

logger = logging.getLogger(__name__)


class CustomerService(ShopifyService):

    @provider_call("list customers")
    async def list_customers(self, request: ListCustomersRequest) -> ServiceResult:
        # Free-text filtering is only available on the search endpoint
        if request.query:
            response = await self._request(
                "GET", self.url("customers/search.json"), params={"query": request.query, "limit": request.limit}
            )
        else:
            response = await self._request("GET", self.url("customers.json"), params={"limit": request.limit})

        customers = response.json().get("customers") or []
        logger.info(f"Found {len(customers)} customers")
        items = [
            CustomerListItem(
                id=c["id"],
                first_name=c.get("first_name"),
                last_name=c.get("last_name"),
                email=c.get("email"),
                phone=c.get("phone"),
            )
            for c in customers
        ]
        return ServiceSuccess(data=[item.model_dump() for item in items])

    @provider_call("create customer")
    async def create_customer(self, request: CreateCustomerRequest) -> ServiceResult:
        response = await self._request(
            "POST", self.url("customers.json"), json={"customer": request.model_dump(exclude_none=True)}
        )
        customer = response.json()["customer"]
        logger.info(f"Customer created successfully: {customer.get('id')}")
        created = CreatedCustomer(
            customer_id=customer["id"],
            created_at=customer.get("created_at"),
            email=customer.get("email"),
            first_name=customer.get("first_name"),
            last_name=customer.get("last_name"),
            phone=customer.get("phone"),
        )
        return ServiceSuccess(data=created.model_dump())
