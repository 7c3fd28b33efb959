"""Domain models for persisted client state."""

from dataclasses import dataclass

from locals_client.domain.models import UserProfile


@dataclass(frozen=True)
class AuthSession:
    """Bearer token together with the profile it belongs to."""

    token: str
    user: UserProfile


@dataclass(frozen=True)
class LocationData:
    """Last known device location with its reverse-geocoded address."""

    latitude: float
    longitude: float
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
