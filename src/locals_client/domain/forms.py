"""Form state for screens that submit to the backend."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

OTP_LENGTH = 4

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass
class StoreForm:
    """Store details entered by a merchant."""

    store_name: str = ""
    description: str = ""
    store_images: list[str] = field(default_factory=list)
    address: str = ""
    map_link: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    contact_website: str = ""
    working_days: dict[str, bool] = field(
        default_factory=lambda: dict.fromkeys(WEEKDAYS, False)
    )

    def to_payload(self) -> dict[str, object]:
        """Return the body expected by the store create/update endpoints."""
        return {
            "storeName": self.store_name,
            "storeDescription": self.description,
            "storeImages": list(self.store_images),
            "address": self.address,
            "mapLink": self.map_link,
            "contact": {
                "phone": self.contact_phone,
                "email": self.contact_email,
                "website": self.contact_website,
            },
            "workingDays": {day: bool(self.working_days.get(day)) for day in WEEKDAYS},
        }


@dataclass
class ProductForm:
    """Product details entered by a merchant. Numeric fields stay as typed."""

    name: str = ""
    description: str = ""
    category: str = ""
    subcategory: str = ""
    images: list[str] = field(default_factory=list)
    price: str = ""
    quantity: str = ""
    sizes: list[str] = field(default_factory=list)
    specifications: dict[str, str] = field(default_factory=dict)
    season: str | None = None
    is_active: bool = True
    is_new_arrival: bool = False
    is_best_seller: bool = False

    def to_payload(self) -> dict[str, object]:
        """Return the body expected by the product create/update endpoints."""
        payload: dict[str, object] = {
            "name": self.name.strip(),
            "description": self.description,
            "category": self.category,
            "subcategory": self.subcategory,
            "images": list(self.images),
            "price": float(self.price),
            "quantity": int(float(self.quantity)),
            "sizes": list(self.sizes),
            "isActive": self.is_active,
            "isNewArrival": self.is_new_arrival,
            "isBestSeller": self.is_best_seller,
        }
        if self.specifications:
            payload["specifications"] = dict(self.specifications)
        if self.season:
            payload["season"] = self.season
        return payload


@dataclass
class OtpEntry:
    """Four single-digit OTP boxes."""

    digits: list[str] = field(default_factory=lambda: [""] * OTP_LENGTH)
    active_index: int = 0

    @property
    def is_complete(self) -> bool:
        return len(self.digits) == OTP_LENGTH and all(d != "" for d in self.digits)

    @property
    def code(self) -> str:
        return "".join(self.digits)

    def enter(self, index: int, value: str) -> None:
        """Set one box. Non-digits are ignored and only the last digit is kept."""
        if not 0 <= index < OTP_LENGTH:
            raise IndexError(f"OTP box {index} out of range")
        digits = [ch for ch in value if ch in "0123456789"]
        self.digits[index] = digits[-1] if digits else ""
        if self.digits[index] and index < OTP_LENGTH - 1:
            self.active_index = index + 1

    def backspace(self, index: int) -> None:
        """Clear the box, or step back and clear the previous one if empty."""
        if self.digits[index]:
            self.digits[index] = ""
        elif index > 0:
            self.active_index = index - 1
            self.digits[index - 1] = ""

    def clear(self) -> None:
        self.digits = [""] * OTP_LENGTH
        self.active_index = 0


@dataclass(frozen=True)
class SubmitResult(Generic[T]):
    """Outcome of a form submission.

    ``errors`` holds inline field messages when local validation blocked the
    request; ``value`` is set only when the backend accepted it.
    """

    value: T | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.value is not None
