"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from locals_client.adapters.blob_client import BlobClient
from locals_client.adapters.local_storage import KeyValueStorage
from locals_client.config import Settings
from locals_client.domain.models import UserProfile
from locals_client.domain.responses import (
    AuthResponse,
    FavoriteListResponse,
    FavoriteStatusListResponse,
    FavoriteStatusResponse,
    MessageResponse,
    ProfileResponse,
    UploadUrlResponse,
)
from locals_client.domain.results import Failure, FailureKind, Ok
from locals_client.errors import NetworkError
from locals_client.services.favorites import FavoritesApi
from locals_client.services.notifications import Notifier
from locals_client.services.session import SessionService, UsersApi
from locals_client.services.uploads import UploadsApi

NETWORK_FAILURE = Failure(FailureKind.NETWORK, "Network error.")


def make_user(**overrides: object) -> UserProfile:
    data: dict[str, object] = {
        "_id": "user-1",
        "name": "Asha",
        "phone": "9876543210",
        "role": "User",
        "isProfileComplete": True,
    }
    data.update(overrides)
    return UserProfile.model_validate(data)


def ok_message(message: str = "ok") -> Ok[MessageResponse]:
    return Ok(MessageResponse(success=True, message=message))


@dataclass
class InMemoryStorage(KeyValueStorage):
    """In-memory key-value storage for tests."""

    entries: dict[str, str] = field(default_factory=dict)

    async def get_item(self, key: str) -> str | None:
        return self.entries.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.entries[key] = value

    async def remove_item(self, key: str) -> None:
        self.entries.pop(key, None)


@dataclass
class FakeNotifier(Notifier):
    """Notifier that records alerts and answers confirmations."""

    answer: bool = True
    alerts: list[tuple[str, str]] = field(default_factory=list)
    confirmations: list[tuple[str, str]] = field(default_factory=list)

    async def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))

    async def confirm(self, title: str, message: str) -> bool:
        self.confirmations.append((title, message))
        return self.answer

    @property
    def titles(self) -> list[str]:
        return [title for title, _ in self.alerts]


@dataclass
class FakeUsersApi(UsersApi):
    """Users API returning canned results and recording calls."""

    user: UserProfile = field(default_factory=make_user)
    token: str = "token-1"
    login_result: Ok[AuthResponse] | Failure | None = None
    profile_result: Ok[ProfileResponse] | Failure | None = None
    otp_valid: bool = True
    calls: list[tuple[str, object]] = field(default_factory=list)

    def _auth(self) -> Ok[AuthResponse]:
        return Ok(AuthResponse(success=True, token=self.token, user=self.user))

    def _profile(self, user: UserProfile | None = None) -> Ok[ProfileResponse]:
        return Ok(ProfileResponse(success=True, user=user or self.user))

    async def request_otp(self, phone: str) -> Ok[MessageResponse] | Failure:
        self.calls.append(("request_otp", phone))
        return ok_message("OTP sent")

    async def verify_otp(self, phone: str, otp: str) -> Ok[AuthResponse] | Failure:
        self.calls.append(("verify_otp", (phone, otp)))
        if not self.otp_valid:
            return Failure(FailureKind.HTTP, "Invalid OTP", 400)
        return self._auth()

    async def login(self, credentials: dict[str, object]) -> Ok[AuthResponse] | Failure:
        self.calls.append(("login", credentials))
        return self.login_result or self._auth()

    async def register(self, payload: dict[str, object]) -> Ok[AuthResponse] | Failure:
        self.calls.append(("register", payload))
        return self._auth()

    async def complete_profile(
        self, payload: dict[str, object]
    ) -> Ok[ProfileResponse] | Failure:
        self.calls.append(("complete_profile", payload))
        self.user = self.user.model_copy(
            update={"name": payload["name"], "is_profile_complete": True}
        )
        return self._profile()

    async def get_profile(
        self, token: str | None = None
    ) -> Ok[ProfileResponse] | Failure:
        self.calls.append(("get_profile", token))
        return self.profile_result or self._profile()

    async def update_profile(
        self, payload: dict[str, object]
    ) -> Ok[ProfileResponse] | Failure:
        self.calls.append(("update_profile", payload))
        self.user = self.user.model_copy(update=payload)
        return self._profile()


@dataclass
class FakeFavoritesApi(FavoritesApi):
    """Favorites API backed by a set of product ids."""

    stored: set[str] = field(default_factory=set)
    fail_with: Failure | None = None
    calls: list[tuple[str, object]] = field(default_factory=list)

    async def add(self, product_id: str) -> Ok[MessageResponse] | Failure:
        self.calls.append(("add", product_id))
        if self.fail_with:
            return self.fail_with
        if product_id in self.stored:
            return Failure(FailureKind.HTTP, "Product already in favorites", 409)
        self.stored.add(product_id)
        return ok_message("Added")

    async def remove(self, product_id: str) -> Ok[MessageResponse] | Failure:
        self.calls.append(("remove", product_id))
        if self.fail_with:
            return self.fail_with
        self.stored.discard(product_id)
        return ok_message("Removed")

    async def list_favorites(self) -> Ok[FavoriteListResponse] | Failure:
        self.calls.append(("list", None))
        favorites = [
            {"_id": f"fav-{pid}", "product": {"_id": pid, "name": pid}}
            for pid in sorted(self.stored)
        ]
        return Ok(
            FavoriteListResponse.model_validate(
                {"success": True, "favorites": favorites}
            )
        )

    async def status(self, product_id: str) -> Ok[FavoriteStatusResponse] | Failure:
        return Ok(
            FavoriteStatusResponse(success=True, isFavorite=product_id in self.stored)
        )

    async def status_multiple(
        self, product_ids: list[str]
    ) -> Ok[FavoriteStatusListResponse] | Failure:
        self.calls.append(("status_multiple", product_ids))
        favorites = [
            {"productId": pid, "isFavorite": pid in self.stored} for pid in product_ids
        ]
        return Ok(
            FavoriteStatusListResponse.model_validate(
                {"success": True, "favorites": favorites}
            )
        )


@dataclass
class FakeUploadsApi(UploadsApi):
    """Uploads API issuing predictable signed URLs."""

    failures: dict[str, Failure] = field(default_factory=dict)
    delete_result: Ok[MessageResponse] | Failure | None = None
    requested: list[tuple[str, str, str, bool]] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    async def request_upload_url(
        self, file_name: str, file_type: str, role: str, permanent: bool
    ) -> Ok[UploadUrlResponse] | Failure:
        self.requested.append((file_name, file_type, role, permanent))
        if file_name in self.failures:
            return self.failures[file_name]
        return Ok(
            UploadUrlResponse.model_validate(
                {
                    "success": True,
                    "uploadUrl": f"https://storage.test/put/{file_name}",
                    "publicUrl": f"https://cdn.test/{file_name}",
                }
            )
        )

    async def delete_file(self, file_url: str) -> Ok[MessageResponse] | Failure:
        self.deleted.append(file_url)
        return self.delete_result or ok_message("Deleted")


@dataclass
class FakeBlobClient(BlobClient):
    """Blob client that records uploads in order."""

    unreadable: set[str] = field(default_factory=set)
    events: list[str] = field(default_factory=list)
    puts: list[tuple[str, bytes, str]] = field(default_factory=list)

    async def read_bytes(self, uri: str) -> bytes:
        self.events.append(f"read:{uri}")
        if uri in self.unreadable:
            raise NetworkError("connection reset")
        return uri.encode()

    async def put_bytes(self, url: str, content: bytes, content_type: str) -> None:
        self.events.append(f"put:{url}")
        self.puts.append((url, content, content_type))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        backend_url="https://api.locals.test",
        storage_path="/tmp/locals-client-test/storage.json",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def users_api() -> FakeUsersApi:
    return FakeUsersApi()


@pytest.fixture
def session_service(
    storage: InMemoryStorage, users_api: FakeUsersApi
) -> SessionService:
    return SessionService(storage, users_api)
