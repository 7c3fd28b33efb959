"""Client-side field validation run before any network call."""

import math
import re

from locals_client.domain.forms import ProductForm, StoreForm

COUNTRY_PREFIX = "+91"
PHONE_DIGITS = 10
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
EMAIL_MAX_LENGTH = 320
PASSWORD_SPECIALS = "@$!%*?&"

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_WEBSITE_RE = re.compile(r"https?://.+")
_NON_DIGITS_RE = re.compile(r"[^0-9]")
_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")


def digits_only(value: str) -> str:
    """Strip everything but digits."""
    return _NON_DIGITS_RE.sub("", value)


def format_phone_display(phone: str) -> str:
    """Mask a phone number for display, keeping the last four digits."""
    digits = digits_only(phone)
    if len(digits) >= PHONE_DIGITS:
        return f"{COUNTRY_PREFIX} ******{digits[-4:]}"
    return f"{COUNTRY_PREFIX} {digits}"


def format_phone_input(text: str) -> str:
    """Group typed digits as ``XXXXX XXXXX``, capped at ten digits."""
    digits = digits_only(text)[:PHONE_DIGITS]
    if len(digits) == PHONE_DIGITS:
        return f"{digits[:5]} {digits[5:]}"
    return digits


def is_valid_phone(phone: str) -> bool:
    return len(digits_only(phone)) == PHONE_DIGITS


def is_valid_email(email: str) -> bool:
    if not email or len(email) > EMAIL_MAX_LENGTH:
        return False
    return bool(_EMAIL_RE.fullmatch(email))


def is_valid_name(name: str) -> bool:
    return len(name.strip()) >= 2


def is_valid_registration_password(password: str) -> bool:
    """Require length, mixed case, a digit and one special character."""
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and _UPPER_RE.search(password) is not None
        and _LOWER_RE.search(password) is not None
        and _DIGIT_RE.search(password) is not None
        and any(ch in PASSWORD_SPECIALS for ch in password)
    )


def is_valid_login_password(password: str) -> bool:
    return PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH


def validate_store_form(form: StoreForm) -> dict[str, str]:
    """Return field errors for the store details form."""
    errors: dict[str, str] = {}

    name = form.store_name.strip()
    if not name:
        errors["store_name"] = "Store name is required"
    elif len(name) < 2:
        errors["store_name"] = "Store name must be at least 2 characters"

    address = form.address.strip()
    if not address:
        errors["address"] = "Address is required"
    elif len(address) < 5:
        errors["address"] = "Address must be at least 5 characters"

    if not form.map_link.strip():
        errors["map_link"] = "Map link is required"

    if not any(form.working_days.values()):
        errors["working_days"] = "Please select at least one working day"

    # contact fields are optional; the last failing one wins
    if form.contact_phone and not 10 <= len(form.contact_phone) <= 12:
        errors["contact"] = "Phone number must be between 10-12 digits"
    if form.contact_email and not _EMAIL_RE.fullmatch(form.contact_email):
        errors["contact"] = "Please provide a valid email address"
    if form.contact_website and not _WEBSITE_RE.fullmatch(form.contact_website):
        errors["contact"] = (
            "Website must be a valid URL starting with http:// or https://"
        )
    return errors


def validate_product_form(form: ProductForm) -> dict[str, str]:
    """Return field errors for the product form."""
    errors: dict[str, str] = {}

    name = form.name.strip()
    if not name:
        errors["name"] = "Product name is required"
    elif len(name) < 2:
        errors["name"] = "Product name must be at least 2 characters"

    if not form.category:
        errors["category"] = "Please select a category"
    if not form.subcategory:
        errors["subcategory"] = "Please select a subcategory"

    price = _parse_number(form.price)
    if not form.price.strip():
        errors["price"] = "Price is required"
    elif price is None or price <= 0:
        errors["price"] = "Please enter a valid price"

    quantity = _parse_number(form.quantity)
    if not form.quantity.strip():
        errors["quantity"] = "Quantity is required"
    elif quantity is None or quantity < 0:
        errors["quantity"] = "Please enter a valid quantity"

    if not form.images:
        errors["images"] = "At least one product image is required"
    return errors


def validate_profile_completion(name: str, gender: str, role: str) -> dict[str, str]:
    """Return field errors for the profile completion form."""
    errors: dict[str, str] = {}
    if not is_valid_name(name):
        errors["name"] = "Name must be at least 2 characters"
    if not gender:
        errors["gender"] = "Please select a gender"
    if not role:
        errors["role"] = "Please select a role"
    return errors


def _parse_number(value: str) -> float | None:
    text = value.strip()
    # float() also accepts non-ASCII digits, which no backend field expects
    if not text.isascii():
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
