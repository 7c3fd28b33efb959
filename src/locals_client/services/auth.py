"""Login, registration and profile flows."""

import logging
from dataclasses import dataclass, field

from locals_client.domain.forms import OtpEntry, SubmitResult
from locals_client.domain.models import UserProfile
from locals_client.domain.results import Ok, message_or
from locals_client.domain.session import AuthSession
from locals_client.services.notifications import Notifier
from locals_client.services.session import SessionService, UsersApi
from locals_client.services.validation import (
    digits_only,
    is_valid_email,
    is_valid_login_password,
    is_valid_name,
    is_valid_phone,
    is_valid_registration_password,
    validate_profile_completion,
)

_logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    """Application service behind the auth and profile screens."""

    users_api: UsersApi
    session: SessionService
    notifier: Notifier
    is_loading: bool = field(default=False, init=False)

    async def request_otp(self, phone: str) -> SubmitResult[str]:
        """Send an OTP and return the cleaned ten-digit number."""
        if not is_valid_phone(phone):
            return SubmitResult(
                errors={"phone": "Please enter a valid 10-digit phone number"}
            )
        if self.is_loading:
            return SubmitResult()
        cleaned = digits_only(phone)
        self.is_loading = True
        try:
            result = await self.users_api.request_otp(cleaned)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            return SubmitResult(value=cleaned)
        await self.notifier.alert(
            "Error", message_or(result, "Failed to send OTP. Please try again.")
        )
        return SubmitResult()

    async def verify_otp(self, phone: str, otp: OtpEntry) -> AuthSession | None:
        """Verify a complete OTP; a wrong code clears the boxes."""
        if not otp.is_complete or self.is_loading:
            return None
        self.is_loading = True
        try:
            result = await self.users_api.verify_otp(phone, otp.code)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            return await self.session.login(result.value.user, result.value.token)
        _logger.info("OTP verification failed: %s", result.kind.value)
        otp.clear()
        return None

    async def login(
        self,
        password: str,
        *,
        email: str | None = None,
        phone: str | None = None,
    ) -> SubmitResult[AuthSession]:
        """Log in with email or phone plus password."""
        errors: dict[str, str] = {}
        credentials: dict[str, object] = {"password": password}
        if email is not None:
            email = email.lower()
            if not is_valid_email(email):
                errors["email"] = "Please enter a valid email address"
            credentials["email"] = email
        elif phone is not None:
            if not is_valid_phone(phone):
                errors["phone"] = "Please enter a valid 10-digit phone number"
            credentials["phone"] = digits_only(phone)
        else:
            errors["email"] = "Email or phone is required"
        if not is_valid_login_password(password):
            errors["password"] = "Password must be between 8 and 128 characters"
        if errors:
            return SubmitResult(errors=errors)
        if self.is_loading:
            return SubmitResult()

        self.is_loading = True
        try:
            result = await self.users_api.login(credentials)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            session = await self.session.login(result.value.user, result.value.token)
            return SubmitResult(value=session)
        await self.notifier.alert(
            "Error", message_or(result, "Authentication failed. Please try again.")
        )
        return SubmitResult()

    async def register(
        self,
        name: str,
        password: str,
        *,
        email: str | None = None,
        phone: str | None = None,
    ) -> SubmitResult[AuthSession]:
        """Create an account; either email or phone must be supplied."""
        errors: dict[str, str] = {}
        payload: dict[str, object] = {"name": name.strip(), "password": password}
        if not is_valid_name(name):
            errors["name"] = "Name must be at least 2 characters"
        if not is_valid_registration_password(password):
            errors["password"] = (
                "Password must be at least 8 characters and include upper and "
                "lower case letters, a number and one of @$!%*?&"
            )
        if email:
            email = email.lower()
            if not is_valid_email(email):
                errors["email"] = "Please enter a valid email address"
            payload["email"] = email
        if phone:
            if len(digits_only(phone)) < 10:
                errors["phone"] = "Please enter a valid phone number"
            payload["phone"] = digits_only(phone)
        if not email and not phone:
            errors["email"] = "Email or phone is required"
        if errors:
            return SubmitResult(errors=errors)
        if self.is_loading:
            return SubmitResult()

        self.is_loading = True
        try:
            result = await self.users_api.register(payload)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            session = await self.session.login(result.value.user, result.value.token)
            return SubmitResult(value=session)
        await self.notifier.alert(
            "Error", message_or(result, "Registration failed. Please try again.")
        )
        return SubmitResult()

    async def complete_profile(
        self, name: str, gender: str, role: str
    ) -> SubmitResult[UserProfile]:
        """Submit the first-login profile details."""
        errors = validate_profile_completion(name, gender, role)
        if errors:
            return SubmitResult(errors=errors)
        if self.is_loading:
            return SubmitResult()
        self.is_loading = True
        try:
            result = await self.users_api.complete_profile(
                {"name": name.strip(), "gender": gender, "role": role}
            )
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            await self.session.update_user(result.value.user)
            return SubmitResult(value=result.value.user)
        await self.notifier.alert(
            "Error", message_or(result, "Failed to complete profile. Please try again.")
        )
        return SubmitResult()

    async def refresh_profile(self) -> UserProfile | None:
        """Reload the profile of the current session."""
        result = await self.users_api.get_profile()
        if isinstance(result, Ok):
            await self.session.update_user(result.value.user)
            return result.value.user
        await self.notifier.alert(
            "Error", message_or(result, "Failed to load profile")
        )
        return None

    async def update_profile(self, fields: dict[str, object]) -> UserProfile | None:
        """Update profile fields such as saved addresses."""
        if self.is_loading:
            return None
        self.is_loading = True
        try:
            result = await self.users_api.update_profile(fields)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            await self.session.update_user(result.value.user)
            return result.value.user
        await self.notifier.alert(
            "Error", message_or(result, "Failed to update profile")
        )
        return None

    async def add_address(self, address: str) -> UserProfile | None:
        """Append a delivery address to the profile."""
        cleaned = address.strip()
        if not cleaned:
            await self.notifier.alert("Error", "Please enter a valid address")
            return None
        user = self.session.user
        current = [str(a) for a in user.addresses] if user else []
        return await self.update_profile({"addresses": [*current, cleaned]})

    async def remove_address(self, address: str) -> UserProfile | None:
        """Remove a saved address after the user confirms."""
        user = self.session.user
        if user is None or address not in user.addresses:
            return None
        confirmed = await self.notifier.confirm(
            "Delete Address", "Are you sure you want to delete this address?"
        )
        if not confirmed:
            return None
        remaining = [str(a) for a in user.addresses if a != address]
        return await self.update_profile({"addresses": remaining})

    async def logout(self) -> bool:
        """Clear the session after the user confirms."""
        confirmed = await self.notifier.confirm(
            "Logout", "Are you sure you want to logout?"
        )
        if not confirmed:
            return False
        await self.session.logout()
        return True
