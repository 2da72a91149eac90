"""
User field validation.

Each validator returns every failed constraint so the caller can report
them together.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email

from shared.validation import FieldError
from .passwords import MAX_PASSWORD_BYTES

MIN_PASSWORD_LENGTH = 6


def _check_email(email: Optional[str]) -> list[FieldError]:
    if not email or not email.strip():
        return [FieldError("email", "Email is required")]
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return [FieldError("email", "Please enter a valid email")]
    return []


def _check_name(name: Optional[str]) -> list[FieldError]:
    if not name or not name.strip():
        return [FieldError("name", "Name is required")]
    return []


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> list[FieldError]:
    """Validate a password registration."""
    errors = _check_name(name) + _check_email(email)

    if not password:
        errors.append(FieldError("password", "Password is required"))
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(FieldError(
            "password",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        ))
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append(FieldError(
            "password",
            f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes",
        ))

    return errors


def validate_federated_profile(
    federated_id: Optional[str],
    name: Optional[str],
    email: Optional[str],
) -> list[FieldError]:
    """Validate the profile asserted by the identity provider."""
    errors: list[FieldError] = []
    if not federated_id or not federated_id.strip():
        errors.append(FieldError("federatedId", "Federated identity is required"))
    return errors + _check_name(name) + _check_email(email)
