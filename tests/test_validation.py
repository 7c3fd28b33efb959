"""Tests for client-side validation."""

import pytest

from locals_client.domain.forms import OtpEntry, ProductForm, StoreForm
from locals_client.services.validation import (
    format_phone_display,
    format_phone_input,
    is_valid_email,
    is_valid_login_password,
    is_valid_phone,
    is_valid_registration_password,
    validate_product_form,
    validate_store_form,
)


def _valid_store_form(**overrides: object) -> StoreForm:
    form = StoreForm(
        store_name="Green Grocer",
        address="14 Market Street",
        map_link="https://maps.example/abc",
    )
    form.working_days["monday"] = True
    for key, value in overrides.items():
        setattr(form, key, value)
    return form


@pytest.mark.parametrize(
    ("phone", "expected"),
    [
        ("9876543210", "+91 ******3210"),
        ("+91 98765 43210", "+91 ******3210"),
        ("12345", "+91 12345"),
    ],
)
def test_format_phone_display(phone: str, expected: str) -> None:
    assert format_phone_display(phone) == expected


def test_format_phone_input_groups_ten_digits() -> None:
    assert format_phone_input("98765432109") == "98765 43210"
    assert format_phone_input("9876") == "9876"


def test_phone_and_email_checks() -> None:
    assert is_valid_phone("98765 43210")
    assert not is_valid_phone("987654321")
    assert is_valid_email("shop@locals.in")
    assert not is_valid_email("shop@locals")


def test_password_rules() -> None:
    assert is_valid_registration_password("Abcdef1!")
    assert not is_valid_registration_password("abcdef1!")
    assert not is_valid_registration_password("Abcdefg!")
    assert is_valid_login_password("x" * 8)
    assert not is_valid_login_password("x" * 129)


def test_checks_reject_trailing_newline_and_non_ascii_characters() -> None:
    assert not is_valid_email("shop@locals.in\n")
    assert not is_valid_phone("٩٨٧٦٥٤٣٢١٠")
    assert format_phone_input("٩٨٧٦٥") == ""
    assert not is_valid_registration_password("Abcdefg²!")
    assert not is_valid_registration_password("Ábcdefg1!")


def test_store_website_with_trailing_newline_is_rejected() -> None:
    errors = validate_store_form(_valid_store_form(contact_website="https://x.in\n"))

    assert "contact" in errors


def test_product_price_in_non_ascii_digits_is_rejected() -> None:
    form = ProductForm(
        name="Mango",
        category="Food",
        subcategory="Fruit",
        price="١٢٠",
        quantity="5",
        images=["https://cdn.test/mango.jpg"],
    )

    assert validate_product_form(form) == {"price": "Please enter a valid price"}


def test_store_form_short_name() -> None:
    errors = validate_store_form(_valid_store_form(store_name="A"))

    assert errors == {"store_name": "Store name must be at least 2 characters"}


def test_store_form_requires_fields_and_day() -> None:
    errors = validate_store_form(StoreForm())

    assert set(errors) == {"store_name", "address", "map_link", "working_days"}


def test_store_form_contact_checks() -> None:
    errors = validate_store_form(
        _valid_store_form(contact_phone="123", contact_website="locals.in")
    )

    assert errors == {
        "contact": "Website must be a valid URL starting with http:// or https://"
    }


def test_product_form_numbers() -> None:
    form = ProductForm(
        name="Mango",
        category="Food",
        subcategory="Fruit",
        price="0",
        quantity="-1",
        images=["https://cdn.test/mango.jpg"],
    )

    errors = validate_product_form(form)

    assert errors == {
        "price": "Please enter a valid price",
        "quantity": "Please enter a valid quantity",
    }


def test_product_form_payload_converts_numbers() -> None:
    form = ProductForm(
        name=" Mango ",
        category="Food",
        subcategory="Fruit",
        price="120.5",
        quantity="10",
        images=["https://cdn.test/mango.jpg"],
    )

    assert validate_product_form(form) == {}
    payload = form.to_payload()
    assert payload["name"] == "Mango"
    assert payload["price"] == 120.5
    assert payload["quantity"] == 10


def test_otp_entry_moves_focus_and_backspaces() -> None:
    otp = OtpEntry()
    otp.enter(0, "a7")
    assert otp.digits[0] == "7"
    assert otp.active_index == 1

    otp.backspace(1)
    assert otp.active_index == 0
    assert otp.digits[0] == ""
    assert not otp.is_complete


def test_otp_completes_only_after_fourth_digit() -> None:
    otp = OtpEntry()
    for index, digit in enumerate("123"):
        otp.enter(index, digit)
        assert not otp.is_complete

    otp.enter(3, "4")

    assert otp.is_complete
    assert otp.code == "1234"


def test_otp_entry_ignores_non_ascii_digits() -> None:
    otp = OtpEntry()
    otp.enter(0, "٣")

    assert otp.digits[0] == ""
    assert otp.active_index == 0
