"""Tests for store browsing and the merchant store form."""

import asyncio
from dataclasses import dataclass, field

import pytest

from locals_client.domain.forms import StoreForm
from locals_client.domain.responses import StoreListResponse, StoreResponse
from locals_client.domain.results import Failure, FailureKind, Ok
from locals_client.services.stores import StoreService, StoresApi

_STORE = {
    "_id": "s1",
    "storeName": "Green Grocer",
    "address": "14 Market Street",
    "mapLink": "https://maps.example/abc",
    "contact": {"phone": "9876543210"},
    "workingDays": {"monday": True, "sunday": False},
}


@dataclass
class FakeStoresApi(StoresApi):
    """Stores API with an optional existing merchant store."""

    own_store: dict[str, object] | None = None
    save_failure: Failure | None = None
    calls: list[tuple[str, object]] = field(default_factory=list)

    def _store(self, body: dict[str, object]) -> Ok[StoreResponse]:
        return Ok(StoreResponse.model_validate({"success": True, "store": body}))

    async def list_stores(
        self, params: dict[str, object] | None = None
    ) -> Ok[StoreListResponse] | Failure:
        self.calls.append(("list", params))
        return Ok(
            StoreListResponse.model_validate({"success": True, "stores": [_STORE]})
        )

    async def best_sellers(self, limit: int = 4) -> Ok[StoreListResponse] | Failure:
        self.calls.append(("best_sellers", limit))
        return Failure(FailureKind.NETWORK, "Network error.")

    async def get_store(self, store_id: str) -> Ok[StoreResponse] | Failure:
        return self._store(_STORE)

    async def get_own_store(self) -> Ok[StoreResponse] | Failure:
        if self.own_store is None:
            return Failure(FailureKind.HTTP, "Store not found", 404)
        return self._store(self.own_store)

    async def create_store(
        self, payload: dict[str, object]
    ) -> Ok[StoreResponse] | Failure:
        self.calls.append(("create", payload))
        return self.save_failure or self._store(
            {**_STORE, "storeName": payload["storeName"]}
        )

    async def update_store(
        self, payload: dict[str, object]
    ) -> Ok[StoreResponse] | Failure:
        self.calls.append(("update", payload))
        return self.save_failure or self._store(
            {**_STORE, "storeName": payload["storeName"]}
        )


@pytest.fixture
def stores_api() -> FakeStoresApi:
    return FakeStoresApi()


@pytest.fixture
def service(stores_api, notifier) -> StoreService:
    return StoreService(stores_api, notifier)


def _valid_form() -> StoreForm:
    form = StoreForm(
        store_name="Corner Shop",
        address="22 Lake Road",
        map_link="https://maps.example/xyz",
    )
    form.working_days["friday"] = True
    return form


def test_search_uses_term_location_and_limit(service, stores_api) -> None:
    stores = asyncio.run(service.search("grocer", location="Pune"))

    assert [s.store_name for s in stores] == ["Green Grocer"]
    _, params = stores_api.calls[0]
    assert params == {"page": None, "limit": 20, "search": "grocer", "location": "Pune"}


def test_best_sellers_failure_alerts(service, notifier) -> None:
    assert asyncio.run(service.best_sellers()) == []
    assert notifier.alerts == [("Error", "Failed to load stores")]


def test_load_own_store_without_store_starts_create_mode(service) -> None:
    form = asyncio.run(service.load_own_store())

    assert service.is_edit_mode is False
    assert form == StoreForm()


def test_load_own_store_fills_form(service, stores_api) -> None:
    stores_api.own_store = _STORE

    form = asyncio.run(service.load_own_store())

    assert service.is_edit_mode is True
    assert form.store_name == "Green Grocer"
    assert form.contact_phone == "9876543210"
    assert form.working_days["monday"] is True
    assert form.working_days["tuesday"] is False


def test_save_store_short_name_makes_no_call(service, stores_api) -> None:
    form = _valid_form()
    form.store_name = "A"

    result = asyncio.run(service.save_store(form))

    assert result.errors == {"store_name": "Store name must be at least 2 characters"}
    assert stores_api.calls == []


def test_save_store_creates_then_updates(service, stores_api) -> None:
    first = asyncio.run(service.save_store(_valid_form()))
    second = asyncio.run(service.save_store(_valid_form()))

    assert first.succeeded and second.succeeded
    assert [name for name, _ in stores_api.calls] == ["create", "update"]
    _, payload = stores_api.calls[0]
    assert payload["workingDays"]["friday"] is True
    assert payload["contact"] == {"phone": "", "email": "", "website": ""}


def test_save_store_failure_alerts(service, stores_api, notifier) -> None:
    stores_api.save_failure = Failure(FailureKind.NETWORK, "Network error.")

    result = asyncio.run(service.save_store(_valid_form()))

    assert not result.succeeded
    assert notifier.alerts == [
        ("Error", "Failed to save store details. Please try again.")
    ]
