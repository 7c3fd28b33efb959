"""Discriminated results returned by the API adapters."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureKind(Enum):
    """Why an API call did not produce a usable payload."""

    NETWORK = "network"
    HTTP = "http"
    REJECTED = "rejected"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call with a validated payload."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Failed call with a human-readable message."""

    kind: FailureKind
    message: str
    status_code: int | None = None

    @property
    def is_network(self) -> bool:
        """Return True when no response was received."""
        return self.kind is FailureKind.NETWORK


def message_or(failure: Failure, fallback: str) -> str:
    """Return the backend message, or a fallback when there is none."""
    if failure.kind in {FailureKind.HTTP, FailureKind.REJECTED} and failure.message:
        return failure.message
    return fallback
