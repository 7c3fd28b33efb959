"""Store browsing and the merchant's own store details."""

from dataclasses import dataclass, field
from typing import Protocol

from locals_client.domain.forms import StoreForm, SubmitResult
from locals_client.domain.models import Store
from locals_client.domain.responses import StoreListResponse, StoreResponse
from locals_client.domain.results import Failure, Ok, message_or
from locals_client.services.notifications import Notifier
from locals_client.services.validation import validate_store_form

SEARCH_LIMIT = 20


class StoresApi(Protocol):
    """Interface for store endpoints."""

    async def list_stores(
        self, params: dict[str, object] | None = None
    ) -> Ok[StoreListResponse] | Failure:
        """List stores."""

    async def best_sellers(self, limit: int = 4) -> Ok[StoreListResponse] | Failure:
        """List best-selling stores."""

    async def get_store(self, store_id: str) -> Ok[StoreResponse] | Failure:
        """Fetch a store by id."""

    async def get_own_store(self) -> Ok[StoreResponse] | Failure:
        """Fetch the logged-in merchant's store."""

    async def create_store(
        self, payload: dict[str, object]
    ) -> Ok[StoreResponse] | Failure:
        """Create the merchant's store."""

    async def update_store(
        self, payload: dict[str, object]
    ) -> Ok[StoreResponse] | Failure:
        """Update the merchant's store."""


@dataclass
class StoreService:
    """Application service for store screens."""

    api: StoresApi
    notifier: Notifier
    is_edit_mode: bool = field(default=False, init=False)
    is_loading: bool = field(default=False, init=False)

    async def list_stores(
        self,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
        location: str | None = None,
    ) -> list[Store]:
        """List stores with optional search and location filters."""
        result = await self.api.list_stores(
            {"page": page, "limit": limit, "search": search, "location": location}
        )
        if isinstance(result, Ok):
            return result.value.stores
        await self.notifier.alert("Error", message_or(result, "Failed to load stores"))
        return []

    async def search(self, term: str, location: str | None = None) -> list[Store]:
        return await self.list_stores(
            search=term, location=location, limit=SEARCH_LIMIT
        )

    async def best_sellers(self, limit: int = 4) -> list[Store]:
        result = await self.api.best_sellers(limit)
        if isinstance(result, Ok):
            return result.value.stores
        await self.notifier.alert("Error", message_or(result, "Failed to load stores"))
        return []

    async def get_store(self, store_id: str) -> Store | None:
        result = await self.api.get_store(store_id)
        if isinstance(result, Ok):
            return result.value.store
        await self.notifier.alert("Error", message_or(result, "Failed to load store"))
        return None

    async def load_own_store(self) -> StoreForm:
        """Load the merchant's store into a form; edit mode when one exists.

        Any failure means the merchant has no store yet.
        """
        result = await self.api.get_own_store()
        if not isinstance(result, Ok):
            self.is_edit_mode = False
            return StoreForm()
        self.is_edit_mode = True
        return _store_to_form(result.value.store)

    async def save_store(self, form: StoreForm) -> SubmitResult[Store]:
        """Validate and create or update the merchant's store."""
        errors = validate_store_form(form)
        if errors:
            return SubmitResult(errors=errors)
        if self.is_loading:
            return SubmitResult()
        self.is_loading = True
        try:
            payload = form.to_payload()
            if self.is_edit_mode:
                result = await self.api.update_store(payload)
            else:
                result = await self.api.create_store(payload)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            self.is_edit_mode = True
            return SubmitResult(value=result.value.store)
        await self.notifier.alert(
            "Error",
            message_or(result, "Failed to save store details. Please try again."),
        )
        return SubmitResult()


def _store_to_form(store: Store) -> StoreForm:
    form = StoreForm(
        store_name=store.store_name,
        description=store.description or "",
        store_images=list(store.store_images),
        address=store.address or "",
        map_link=store.map_link or "",
        contact_phone=store.contact.phone or "",
        contact_email=store.contact.email or "",
        contact_website=store.contact.website or "",
    )
    for day in form.working_days:
        form.working_days[day] = bool(store.working_days.get(day))
    return form
