"""Favorites endpoints."""

from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import (
    FavoriteListResponse,
    FavoriteStatusListResponse,
    FavoriteStatusResponse,
    MessageResponse,
)
from locals_client.domain.results import Failure, Ok
from locals_client.services.favorites import FavoritesApi

_BASE = "/api/v1/favorite"


@dataclass
class RestFavoritesApi(FavoritesApi):
    """Favorites API over the marketplace REST client."""

    api: HttpxApiClient

    async def add(self, product_id: str) -> Ok[MessageResponse] | Failure:
        """Add a product to favorites."""
        return await self.api.call(
            "POST", f"{_BASE}/add", MessageResponse, json={"productId": product_id}
        )

    async def remove(self, product_id: str) -> Ok[MessageResponse] | Failure:
        """Remove a product from favorites."""
        return await self.api.call(
            "DELETE", f"{_BASE}/remove/{product_id}", MessageResponse
        )

    async def list_favorites(self) -> Ok[FavoriteListResponse] | Failure:
        """List the user's favorites."""
        return await self.api.call("GET", f"{_BASE}/user", FavoriteListResponse)

    async def status(self, product_id: str) -> Ok[FavoriteStatusResponse] | Failure:
        """Return whether one product is favorited."""
        return await self.api.call(
            "GET", f"{_BASE}/status/{product_id}", FavoriteStatusResponse
        )

    async def status_multiple(
        self, product_ids: list[str]
    ) -> Ok[FavoriteStatusListResponse] | Failure:
        """Return favorite flags for several products."""
        return await self.api.call(
            "POST",
            f"{_BASE}/status/multiple",
            FavoriteStatusListResponse,
            json={"productIds": product_ids},
        )
