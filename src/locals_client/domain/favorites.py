"""Favorite product ids and the reducer that drives them."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FavoritesLoaded:
    product_ids: tuple[str, ...]


@dataclass(frozen=True)
class FavoriteAdded:
    product_id: str


@dataclass(frozen=True)
class FavoriteRemoved:
    product_id: str


@dataclass(frozen=True)
class FavoritesMerged:
    product_ids: tuple[str, ...]


FavoritesAction = FavoritesLoaded | FavoriteAdded | FavoriteRemoved | FavoritesMerged


def reduce_favorites(
    favorites: frozenset[str], action: FavoritesAction
) -> frozenset[str]:
    """Return the favorite set after applying one action."""
    if isinstance(action, FavoritesLoaded):
        return frozenset(action.product_ids)
    if isinstance(action, FavoriteAdded):
        return favorites | {action.product_id}
    if isinstance(action, FavoriteRemoved):
        return favorites - {action.product_id}
    if isinstance(action, FavoritesMerged):
        return favorites | set(action.product_ids)
    return favorites
