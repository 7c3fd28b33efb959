"""Store endpoints."""

from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import StoreListResponse, StoreResponse
from locals_client.domain.results import Failure, Ok
from locals_client.services.stores import StoresApi

_BASE = "/api/v1/store"


@dataclass
class RestStoresApi(StoresApi):
    """Stores API over the marketplace REST client."""

    api: HttpxApiClient

    async def list_stores(
        self, params: dict[str, object] | None = None
    ) -> Ok[StoreListResponse] | Failure:
        """List stores with paging, search and location filters."""
        return await self.api.call(
            "GET", f"{_BASE}/all", StoreListResponse, params=params
        )

    async def best_sellers(self, limit: int = 4) -> Ok[StoreListResponse] | Failure:
        """List best-selling stores."""
        return await self.api.call(
            "GET", f"{_BASE}/bestsellers", StoreListResponse, params={"limit": limit}
        )

    async def get_store(self, store_id: str) -> Ok[StoreResponse] | Failure:
        """Fetch a store by id."""
        return await self.api.call("GET", f"{_BASE}/{store_id}", StoreResponse)

    async def get_own_store(self) -> Ok[StoreResponse] | Failure:
        """Fetch the logged-in merchant's store."""
        return await self.api.call("GET", f"{_BASE}/details", StoreResponse)

    async def create_store(
        self, payload: dict[str, object]
    ) -> Ok[StoreResponse] | Failure:
        """Create the merchant's store."""
        return await self.api.call(
            "POST", f"{_BASE}/create", StoreResponse, json=payload
        )

    async def update_store(
        self, payload: dict[str, object]
    ) -> Ok[StoreResponse] | Failure:
        """Update the merchant's store."""
        return await self.api.call(
            "PUT", f"{_BASE}/update", StoreResponse, json=payload
        )
