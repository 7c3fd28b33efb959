"""Product catalog browsing and merchant product management."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from locals_client.domain.forms import ProductForm, SubmitResult
from locals_client.domain.models import Product
from locals_client.domain.responses import (
    MessageResponse,
    ProductListResponse,
    ProductResponse,
)
from locals_client.domain.results import Failure, Ok, message_or
from locals_client.services.notifications import Notifier
from locals_client.services.validation import validate_product_form

SEARCH_LIMIT = 20

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable


class ProductsApi(Protocol):
    """Interface for product endpoints."""

    async def list_products(
        self, params: dict[str, object] | None = None
    ) -> Ok[ProductListResponse] | Failure:
        """List products with paging and filters."""

    async def list_store_products(
        self, store_id: str, params: dict[str, object] | None = None
    ) -> Ok[ProductListResponse] | Failure:
        """List products sold by one store."""

    async def list_merchant_products(self) -> Ok[ProductListResponse] | Failure:
        """List the logged-in merchant's products."""

    async def get_product(self, product_id: str) -> Ok[ProductResponse] | Failure:
        """Fetch one product."""

    async def create_product(
        self, payload: dict[str, object]
    ) -> Ok[ProductResponse] | Failure:
        """Create a product."""

    async def update_product(
        self, product_id: str, payload: dict[str, object]
    ) -> Ok[ProductResponse] | Failure:
        """Update a product."""

    async def delete_product(self, product_id: str) -> Ok[MessageResponse] | Failure:
        """Delete a product."""


@dataclass(frozen=True)
class ProductFilters:
    """Query filters accepted by the product listing."""

    page: int | None = None
    limit: int | None = None
    category: str | None = None
    subcategory: str | None = None
    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    is_best_seller: bool | None = None
    is_new_arrival: bool | None = None

    def to_params(self) -> dict[str, object]:
        return {
            "page": self.page,
            "limit": self.limit,
            "category": self.category,
            "subcategory": self.subcategory,
            "search": self.search,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "isBestSeller": self.is_best_seller,
            "isNewArrival": self.is_new_arrival,
        }


@dataclass
class CatalogService:
    """Application service for product screens."""

    api: ProductsApi
    notifier: Notifier
    is_loading: bool = field(default=False, init=False)

    async def list_products(
        self, filters: ProductFilters | None = None
    ) -> ProductListResponse | None:
        """Return a page of products."""
        params = (filters or ProductFilters()).to_params()
        return await self._load_list(self.api.list_products(params))

    async def search(
        self, term: str, filters: ProductFilters | None = None
    ) -> list[Product]:
        """Search products by free text."""
        base = filters or ProductFilters()
        params = {**base.to_params(), "search": term, "limit": SEARCH_LIMIT}
        page = await self._load_list(self.api.list_products(params))
        return page.products if page else []

    async def by_category(
        self, category: str, subcategory: str | None = None
    ) -> list[Product]:
        """List products in a category."""
        params = ProductFilters(
            category=category, subcategory=subcategory, limit=SEARCH_LIMIT
        ).to_params()
        page = await self._load_list(self.api.list_products(params))
        return page.products if page else []

    async def store_products(
        self, store_id: str, filters: ProductFilters | None = None
    ) -> ProductListResponse | None:
        """Return a page of one store's products."""
        params = (filters or ProductFilters()).to_params()
        return await self._load_list(self.api.list_store_products(store_id, params))

    async def merchant_products(self) -> list[Product]:
        """List the logged-in merchant's products."""
        page = await self._load_list(self.api.list_merchant_products())
        return page.products if page else []

    async def get_product(self, product_id: str) -> Product | None:
        """Fetch one product."""
        result = await self.api.get_product(product_id)
        if isinstance(result, Ok):
            return result.value.product
        await self.notifier.alert("Error", message_or(result, "Failed to load product"))
        return None

    async def create_product(self, form: ProductForm) -> SubmitResult[Product]:
        """Validate and create a product."""
        errors = validate_product_form(form)
        if errors:
            return SubmitResult(errors=errors)
        if self.is_loading:
            return SubmitResult()
        self.is_loading = True
        try:
            result = await self.api.create_product(form.to_payload())
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            return SubmitResult(value=result.value.product)
        await self.notifier.alert(
            "Error",
            message_or(result, "Failed to create product. Please try again."),
        )
        return SubmitResult()

    async def update_product(
        self, product_id: str, form: ProductForm
    ) -> SubmitResult[Product]:
        """Validate and update a product."""
        errors = validate_product_form(form)
        if errors:
            return SubmitResult(errors=errors)
        if self.is_loading:
            return SubmitResult()
        self.is_loading = True
        try:
            result = await self.api.update_product(product_id, form.to_payload())
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            return SubmitResult(value=result.value.product)
        await self.notifier.alert(
            "Error",
            message_or(result, "Failed to update product. Please try again."),
        )
        return SubmitResult()

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product after the user confirms."""
        if self.is_loading:
            return False
        confirmed = await self.notifier.confirm(
            "Delete Product",
            "Are you sure you want to delete this product? "
            "This action cannot be undone.",
        )
        if not confirmed:
            return False
        self.is_loading = True
        try:
            result = await self.api.delete_product(product_id)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            return True
        await self.notifier.alert(
            "Error", message_or(result, "Failed to delete product")
        )
        return False

    async def _load_list(
        self, pending: "Awaitable[Ok[ProductListResponse] | Failure]"
    ) -> ProductListResponse | None:
        self.is_loading = True
        try:
            result = await pending
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            return result.value
        _logger.warning("Product listing failed: %s", result.message)
        await self.notifier.alert(
            "Error", message_or(result, "Failed to load products")
        )
        return None
