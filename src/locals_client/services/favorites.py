"""Favorite products for the logged-in user."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from locals_client.domain.favorites import (
    FavoriteAdded,
    FavoriteRemoved,
    FavoritesAction,
    FavoritesLoaded,
    FavoritesMerged,
    reduce_favorites,
)
from locals_client.domain.responses import (
    FavoriteListResponse,
    FavoriteStatusListResponse,
    FavoriteStatusResponse,
    MessageResponse,
)
from locals_client.domain.results import Failure, FailureKind, Ok, message_or
from locals_client.services.notifications import Notifier
from locals_client.services.session import SessionService

_HTTP_CONFLICT = 409

_logger = logging.getLogger(__name__)


class FavoritesApi(Protocol):
    """Interface for favorites endpoints."""

    async def add(self, product_id: str) -> Ok[MessageResponse] | Failure:
        """Add a product to favorites."""

    async def remove(self, product_id: str) -> Ok[MessageResponse] | Failure:
        """Remove a product from favorites."""

    async def list_favorites(self) -> Ok[FavoriteListResponse] | Failure:
        """List the user's favorites."""

    async def status(self, product_id: str) -> Ok[FavoriteStatusResponse] | Failure:
        """Return whether one product is favorited."""

    async def status_multiple(
        self, product_ids: list[str]
    ) -> Ok[FavoriteStatusListResponse] | Failure:
        """Return favorite flags for several products."""


@dataclass
class FavoritesService:
    """Client-side favorite set, updated only after the backend agrees."""

    api: FavoritesApi
    session: SessionService
    notifier: Notifier
    favorites: frozenset[str] = field(default_factory=frozenset, init=False)
    is_loading: bool = field(default=False, init=False)

    def dispatch(self, action: FavoritesAction) -> None:
        self.favorites = reduce_favorites(self.favorites, action)

    def is_favorite(self, product_id: str) -> bool:
        return product_id in self.favorites

    async def toggle(self, product_id: str) -> bool:
        """Add or remove a product depending on current membership."""
        if self.is_favorite(product_id):
            return await self.remove(product_id)
        return await self.add(product_id)

    async def add(self, product_id: str) -> bool:
        """Add a product to favorites."""
        if not await self._require_login("Please login to add items to favorites"):
            return False
        if self.is_loading:
            return False
        self.is_loading = True
        try:
            result = await self.api.add(product_id)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            self.dispatch(FavoriteAdded(product_id))
            return True
        if result.kind is FailureKind.HTTP and result.status_code == _HTTP_CONFLICT:
            await self.notifier.alert(
                "Already in Favorites", "This product is already in your favorites"
            )
        else:
            await self.notifier.alert(
                "Error", _rejection_or(result, "Failed to add to favorites")
            )
        return False

    async def remove(self, product_id: str) -> bool:
        """Remove a product from favorites."""
        if not await self._require_login("Please login to manage favorites"):
            return False
        if self.is_loading:
            return False
        self.is_loading = True
        try:
            result = await self.api.remove(product_id)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            self.dispatch(FavoriteRemoved(product_id))
            return True
        await self.notifier.alert(
            "Error", _rejection_or(result, "Failed to remove from favorites")
        )
        return False

    async def load(self) -> None:
        """Replace the set with the user's favorites; cleared when logged out."""
        if not self.session.is_authenticated:
            self.dispatch(FavoritesLoaded(()))
            return
        self.is_loading = True
        try:
            result = await self.api.list_favorites()
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            ids = tuple(entry.product.id for entry in result.value.favorites)
            self.dispatch(FavoritesLoaded(ids))
        else:
            _logger.warning("Failed to load favorites: %s", result.message)

    async def check_multiple(self, product_ids: list[str]) -> None:
        """Merge favorite flags for products shown on screen."""
        if not self.session.is_authenticated or not product_ids:
            return
        result = await self.api.status_multiple(product_ids)
        if isinstance(result, Ok):
            ids = tuple(s.product_id for s in result.value.favorites if s.is_favorite)
            self.dispatch(FavoritesMerged(ids))
        else:
            _logger.warning("Failed to check favorite status: %s", result.message)

    async def _require_login(self, message: str) -> bool:
        if self.session.is_authenticated:
            return True
        await self.notifier.alert("Login Required", message)
        return False


def _rejection_or(failure: Failure, fallback: str) -> str:
    # only a 2xx body with success=false carries a message worth showing here
    if failure.kind is FailureKind.REJECTED:
        return message_or(failure, fallback)
    return fallback
