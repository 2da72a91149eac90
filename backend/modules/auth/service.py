"""
Authentication service implementation.

Signs and validates stateless JWT bearer tokens and implements the three
enrollment paths: password registration/login, federated identity, and
lookup by id from a token.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from starlette.concurrency import run_in_threadpool

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .exceptions import (
    AuthNotConfiguredError,
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
    UserValidationError,
)
from .interfaces import IAuthService
from .models import AuthResult, JWTPayload
from .passwords import hash_password, verify_password
from .repository import UserRepository
from .validation import validate_federated_profile, validate_registration

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens are HS256 JWTs carrying only the user id. There is no
    revocation list: logout is the client discarding its token.
    """

    def __init__(self, users: UserRepository, settings: Optional[Settings] = None):
        self._users = users
        self._settings = settings or get_settings()

    # -------------------------------------------------------------------------
    # Enrollment paths
    # -------------------------------------------------------------------------

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Create a password account and sign a token for it."""
        self._require_secret()

        errors = validate_registration(name, email, password)
        if errors:
            raise UserValidationError(errors)

        email = email.strip()
        if self._users.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        password_hash = await run_in_threadpool(hash_password, password)
        user = self._users.create(
            name=name.strip(),
            email=email,
            password_hash=password_hash,
        )
        logger.info("Registered user %s", user.id)
        return AuthResult(token=self.issue_token(user.id), user=user.to_public(), created=True)

    async def login(self, email: str, password: str) -> AuthResult:
        """Verify email and password and sign a token."""
        self._require_secret()

        user = self._users.get_by_email(email.strip()) if email else None
        # Always run a bcrypt check so unknown emails take as long as bad passwords
        password_ok = await run_in_threadpool(
            verify_password, password or "", user.password_hash if user else None
        )
        if user is None or not password_ok:
            raise InvalidCredentialsError()

        return AuthResult(token=self.issue_token(user.id), user=user.to_public())

    async def login_federated(
        self,
        federated_id: Optional[str],
        name: Optional[str],
        email: Optional[str],
        avatar: Optional[str] = None,
    ) -> AuthResult:
        """Log in, link, or create a user from a federated identity."""
        self._require_secret()

        errors = validate_federated_profile(federated_id, name, email)
        if errors:
            raise UserValidationError(errors)

        federated_id = federated_id.strip()
        email = email.strip()

        user = self._users.get_by_federated_id(federated_id)
        if user is not None:
            return AuthResult(token=self.issue_token(user.id), user=user.to_public())

        user = self._users.get_by_email(email)
        if user is not None:
            linked = self._users.link_federated_identity(user.id, federated_id, avatar or None)
            if linked is None:
                raise UserNotFoundError(user.id)
            logger.info("Linked federated identity to user %s", linked.id)
            user = linked
        else:
            user = self._users.create(
                name=name.strip(),
                email=email,
                federated_id=federated_id,
                avatar_url=avatar or "",
            )
            logger.info("Created federated user %s", user.id)

        return AuthResult(token=self.issue_token(user.id), user=user.to_public(), created=True)

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def issue_token(self, user_id: str) -> str:
        """Sign a bearer token bound to user_id."""
        self._require_secret()
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + timedelta(days=self._settings.jwt_expires_days),
        }
        return jwt.encode(payload, self._settings.jwt_secret, algorithm=self._settings.jwt_algorithm)

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Signature and expiry are checked, then the user is loaded so that
        tokens of deleted accounts stop working.
        """
        if not token:
            raise MissingTokenError()

        self._require_secret()

        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
            )
            jwt_payload = JWTPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")
        except ValueError:
            raise InvalidTokenError("Invalid token: malformed claims")

        user = self._users.get_by_id(jwt_payload.sub)
        if user is None:
            raise UserNotFoundError(jwt_payload.sub)
        return user.to_public()

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def get_user_by_id(self, user_id: str) -> Optional[AuthenticatedUser]:
        user = self._users.get_by_id(user_id)
        return user.to_public() if user else None

    def _require_secret(self) -> None:
        if not self._settings.jwt_secret:
            raise AuthNotConfiguredError()