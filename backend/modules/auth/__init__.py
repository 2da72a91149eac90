"""
Authentication module.

Handles password and federated enrollment, JWT issuance and validation,
and the user store.

Public API:
- IAuthService: Interface for auth operations
- AuthenticatedUser: Public view of a user
- User: Stored user record
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import User, UserRole, JWTPayload, AuthResult
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthNotConfiguredError,
    InvalidCredentialsError,
    UserNotFoundError,
    EmailAlreadyRegisteredError,
    FederatedIdentityConflictError,
    UserValidationError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthenticatedUser",
    "User",
    "UserRole",
    "JWTPayload",
    "AuthResult",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthNotConfiguredError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "EmailAlreadyRegisteredError",
    "FederatedIdentityConflictError",
    "UserValidationError",
]
