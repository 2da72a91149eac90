"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)
from shared.validation import FieldError, errors_to_details, join_messages


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message, code="MISSING_TOKEN")


class AuthNotConfiguredError(AuthenticationError):
    """Raised when no token signing secret is configured."""

    def __init__(self):
        super().__init__("Server authentication not configured", code="AUTH_NOT_CONFIGURED")


class InvalidCredentialsError(AuthenticationError):
    """Raised on a failed password login. Does not say which part was wrong."""

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class UserNotFoundError(AuthenticationError):
    """Raised when a token refers to a user that no longer exists."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "User already exists with this email",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )


class FederatedIdentityConflictError(ConflictError):
    """Raised when a federated id is already linked to another account."""

    def __init__(self, federated_id: str):
        super().__init__(
            "Federated identity is already linked to another account",
            code="FEDERATED_ID_CONFLICT",
            details={"federated_id": federated_id},
        )


class UserValidationError(ValidationError):
    """Raised when registration or profile fields fail validation."""

    def __init__(self, errors: list[FieldError]):
        super().__init__(
            join_messages(errors),
            code="VALIDATION_FAILED",
            details=errors_to_details(errors),
        )

