"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from .models import AuthResult


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """
        Create a password account and sign a token for it.

        Raises:
            UserValidationError: If any field is invalid
            EmailAlreadyRegisteredError: If the email already has an account
        """
        ...

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Verify email and password and sign a token.

        Raises:
            InvalidCredentialsError: On unknown email or wrong password
        """
        ...

    async def login_federated(
        self,
        federated_id: Optional[str],
        name: Optional[str],
        email: Optional[str],
        avatar: Optional[str] = None,
    ) -> AuthResult:
        """
        Log in, link, or create a user from a federated identity.

        Precedence: federated id match, then email match (link), then create.
        AuthResult.created is False only for the first case.
        """
        ...

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a bearer token and return the owning user.

        Raises:
            AuthenticationError: If the token is missing, invalid, expired,
                or its user no longer exists
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[AuthenticatedUser]:
        """Get a user's public view by id, or None."""
        ...
