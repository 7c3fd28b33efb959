"""Product catalog endpoints."""

from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import (
    MessageResponse,
    ProductListResponse,
    ProductResponse,
)
from locals_client.domain.results import Failure, Ok
from locals_client.services.catalog import ProductsApi

_BASE = "/api/v1/product"


@dataclass
class RestProductsApi(ProductsApi):
    """Products API over the marketplace REST client."""

    api: HttpxApiClient

    async def list_products(
        self, params: dict[str, object] | None = None
    ) -> Ok[ProductListResponse] | Failure:
        """List products with paging and filters."""
        return await self.api.call(
            "GET", f"{_BASE}/all", ProductListResponse, params=params
        )

    async def list_store_products(
        self, store_id: str, params: dict[str, object] | None = None
    ) -> Ok[ProductListResponse] | Failure:
        """List products sold by one store."""
        return await self.api.call(
            "GET", f"{_BASE}/store/{store_id}", ProductListResponse, params=params
        )

    async def list_merchant_products(self) -> Ok[ProductListResponse] | Failure:
        """List the logged-in merchant's products."""
        return await self.api.call("GET", f"{_BASE}/merchant", ProductListResponse)

    async def get_product(self, product_id: str) -> Ok[ProductResponse] | Failure:
        """Fetch one product."""
        return await self.api.call("GET", f"{_BASE}/{product_id}", ProductResponse)

    async def create_product(
        self, payload: dict[str, object]
    ) -> Ok[ProductResponse] | Failure:
        """Create a product."""
        return await self.api.call(
            "POST", f"{_BASE}/create", ProductResponse, json=payload
        )

    async def update_product(
        self, product_id: str, payload: dict[str, object]
    ) -> Ok[ProductResponse] | Failure:
        """Update a product."""
        return await self.api.call(
            "PUT", f"{_BASE}/{product_id}", ProductResponse, json=payload
        )

    async def delete_product(self, product_id: str) -> Ok[MessageResponse] | Failure:
        """Delete a product."""
        return await self.api.call("DELETE", f"{_BASE}/{product_id}", MessageResponse)
