"""User and authentication endpoints."""

from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import (
    AuthResponse,
    MessageResponse,
    ProfileResponse,
)
from locals_client.domain.results import Failure, Ok
from locals_client.services.session import UsersApi

_BASE = "/api/v1/user"


@dataclass
class RestUsersApi(UsersApi):
    """Users API over the marketplace REST client."""

    api: HttpxApiClient

    async def request_otp(self, phone: str) -> Ok[MessageResponse] | Failure:
        """Send an OTP to a phone number."""
        return await self.api.call(
            "POST", f"{_BASE}/onboarding", MessageResponse, json={"phone": phone}
        )

    async def verify_otp(self, phone: str, otp: str) -> Ok[AuthResponse] | Failure:
        """Exchange a phone OTP for a session."""
        return await self.api.call(
            "POST",
            f"{_BASE}/verify-otp",
            AuthResponse,
            json={"phone": phone, "otp": otp},
        )

    async def login(self, credentials: dict[str, object]) -> Ok[AuthResponse] | Failure:
        """Log in with email or phone and password."""
        return await self.api.call(
            "POST", f"{_BASE}/login", AuthResponse, json=credentials
        )

    async def register(self, payload: dict[str, object]) -> Ok[AuthResponse] | Failure:
        """Register a new account."""
        return await self.api.call(
            "POST", f"{_BASE}/register", AuthResponse, json=payload
        )

    async def complete_profile(
        self, payload: dict[str, object]
    ) -> Ok[ProfileResponse] | Failure:
        """Submit name, gender and role after first login."""
        return await self.api.call(
            "POST", f"{_BASE}/complete-profile", ProfileResponse, json=payload
        )

    async def get_profile(
        self, token: str | None = None
    ) -> Ok[ProfileResponse] | Failure:
        """Fetch the profile, optionally authenticating with an explicit token."""
        headers = {"Authorization": f"Bearer {token}"} if token else None
        return await self.api.call(
            "GET", f"{_BASE}/profile", ProfileResponse, headers=headers
        )

    async def update_profile(
        self, payload: dict[str, object]
    ) -> Ok[ProfileResponse] | Failure:
        """Update profile fields such as addresses."""
        return await self.api.call(
            "PUT", f"{_BASE}/profile", ProfileResponse, json=payload
        )
