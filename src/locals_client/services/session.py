"""Authenticated session lifecycle."""

import json
import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from locals_client.adapters.local_storage import (
    AUTH_TOKEN_KEY,
    USER_DATA_KEY,
    KeyValueStorage,
)
from locals_client.domain.models import UserProfile
from locals_client.domain.responses import (
    AuthResponse,
    MessageResponse,
    ProfileResponse,
)
from locals_client.domain.results import Failure, Ok
from locals_client.domain.session import AuthSession

_logger = logging.getLogger(__name__)


class UsersApi(Protocol):
    """Interface for user and authentication endpoints."""

    async def request_otp(self, phone: str) -> Ok[MessageResponse] | Failure:
        """Send an OTP to a phone number."""

    async def verify_otp(self, phone: str, otp: str) -> Ok[AuthResponse] | Failure:
        """Exchange a phone OTP for a session."""

    async def login(self, credentials: dict[str, object]) -> Ok[AuthResponse] | Failure:
        """Log in with email or phone and password."""

    async def register(self, payload: dict[str, object]) -> Ok[AuthResponse] | Failure:
        """Register a new account."""

    async def complete_profile(
        self, payload: dict[str, object]
    ) -> Ok[ProfileResponse] | Failure:
        """Submit name, gender and role."""

    async def get_profile(
        self, token: str | None = None
    ) -> Ok[ProfileResponse] | Failure:
        """Fetch the profile, optionally with an explicit token."""

    async def update_profile(
        self, payload: dict[str, object]
    ) -> Ok[ProfileResponse] | Failure:
        """Update profile fields."""


@dataclass
class SessionService:
    """Holds the current session and mirrors it to local storage.

    Token and user are always set and cleared together.
    """

    storage: KeyValueStorage
    users_api: UsersApi
    _session: AuthSession | None = field(default=None, init=False)
    is_loading: bool = field(default=True, init=False)

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def token(self) -> str | None:
        return self._session.token if self._session else None

    @property
    def user(self) -> UserProfile | None:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    async def restore(self) -> AuthSession | None:
        """Load the stored session and validate it against the backend.

        A rejected token clears storage. When the backend is unreachable the
        stored session is kept so the app can start offline.
        """
        self.is_loading = True
        try:
            token = await self.storage.get_item(AUTH_TOKEN_KEY)
            raw_user = await self.storage.get_item(USER_DATA_KEY)
            if not token and not raw_user:
                return None
            if not token or not raw_user:
                _logger.warning("Stored session is incomplete; clearing it")
                await self.clear()
                return None
            try:
                stored_user = UserProfile.model_validate(json.loads(raw_user))
            except (ValueError, ValidationError):
                _logger.warning("Stored user data is unreadable; clearing session")
                await self.clear()
                return None

            result = await self.users_api.get_profile(token=token)
            if isinstance(result, Ok):
                self._session = AuthSession(token=token, user=result.value.user)
                await self._persist_user(result.value.user)
            elif result.is_network:
                _logger.info("Profile check unreachable; using stored session")
                self._session = AuthSession(token=token, user=stored_user)
            else:
                _logger.info("Stored token rejected; clearing session")
                await self.clear()
            return self._session
        finally:
            self.is_loading = False

    async def login(self, user: UserProfile, token: str) -> AuthSession:
        """Adopt and persist a new session."""
        self._session = AuthSession(token=token, user=user)
        await self._persist_user(user)
        await self.storage.set_item(AUTH_TOKEN_KEY, token)
        return self._session

    async def update_user(self, user: UserProfile) -> None:
        """Replace the profile of the current session."""
        if self._session is None:
            raise RuntimeError("Cannot update user without an active session")
        self._session = AuthSession(token=self._session.token, user=user)
        await self._persist_user(user)

    async def clear(self) -> None:
        """Forget the session in memory and in storage."""
        self._session = None
        await self.storage.remove_item(AUTH_TOKEN_KEY)
        await self.storage.remove_item(USER_DATA_KEY)

    async def logout(self) -> None:
        """End the session."""
        _logger.info("Logging out")
        await self.clear()

    async def _persist_user(self, user: UserProfile) -> None:
        await self.storage.set_item(
            USER_DATA_KEY, user.model_dump_json(by_alias=True, exclude_none=True)
        )
