"""Tests for container wiring."""

import asyncio
import json

import pytest

from locals_client.adapters.local_storage import (
    AUTH_TOKEN_KEY,
    LOCATION_KEY,
    SELECTED_CITY_KEY,
    USER_DATA_KEY,
)
from locals_client.containers import AppContainer, build_container
from locals_client.services.favorites import FavoritesService
from locals_client.services.location import LocationService
from locals_client.services.session import SessionService
from locals_client.services.uploads import ImageUploader
from tests.conftest import (
    FakeFavoritesApi,
    FakeNotifier,
    FakeUsersApi,
    InMemoryStorage,
    make_user,
)


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.session_service is not None
    assert container.favorites_service.session is container.session_service
    assert container.auth_service.session is container.session_service
    assert container.order_service.session is container.session_service
    assert container.order_service.cart is container.cart_service
    assert container.merchant_order_service.notifier is container.notifier
    asyncio.run(container.close_resources())


def test_new_uploader_uses_upload_settings(settings) -> None:
    notifier = FakeNotifier()
    container = build_container(
        settings.model_copy(update={"max_upload_items": 3, "upload_concurrency": 2}),
        notifier=notifier,
    )
    changes: list[list[str]] = []

    uploader = container.new_uploader(changes.append)

    assert isinstance(uploader, ImageUploader)
    assert uploader.max_items == 3
    assert uploader.concurrency == 2
    assert uploader.role == "Merchant"
    assert uploader.notifier is notifier
    asyncio.run(container.close_resources())


def _with_stored_state(
    settings, storage: InMemoryStorage, favorites_api: FakeFavoritesApi
) -> AppContainer:
    container = build_container(settings, notifier=FakeNotifier())
    container.storage = storage
    container.session_service = SessionService(storage, FakeUsersApi())
    container.location_service = LocationService(storage)
    container.favorites_service = FavoritesService(
        favorites_api, container.session_service, container.notifier
    )
    return container


@pytest.fixture
def favorites_api() -> FakeFavoritesApi:
    return FakeFavoritesApi(stored={"p1", "p2"})


def test_init_restores_session_location_and_favorites(settings, favorites_api) -> None:
    storage = InMemoryStorage(
        {
            AUTH_TOKEN_KEY: "tok",
            USER_DATA_KEY: make_user().model_dump_json(
                by_alias=True, exclude_none=True
            ),
            LOCATION_KEY: json.dumps(
                {"latitude": 12.97, "longitude": 77.59, "city": "Bengaluru"}
            ),
            SELECTED_CITY_KEY: "Bengaluru",
        }
    )
    container = _with_stored_state(settings, storage, favorites_api)

    asyncio.run(container.init())

    assert container.session_service.token == "tok"
    assert container.session_service.is_loading is False
    location = container.location_service.current_location
    assert location is not None and location.city == "Bengaluru"
    assert container.location_service.selected_city == "Bengaluru"
    assert container.favorites_service.favorites == frozenset({"p1", "p2"})
    asyncio.run(container.close_resources())


def test_init_without_session_skips_favorites(settings, favorites_api) -> None:
    container = _with_stored_state(settings, InMemoryStorage(), favorites_api)

    asyncio.run(container.init())

    assert not container.session_service.is_authenticated
    assert container.location_service.current_location is None
    assert container.favorites_service.favorites == frozenset()
    assert favorites_api.calls == []
    asyncio.run(container.close_resources())
