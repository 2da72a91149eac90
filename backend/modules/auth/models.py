"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


class UserRole(str, Enum):
    """Account roles."""

    USER = "user"
    ADMIN = "admin"


class JWTPayload(BaseModel):
    """Decoded bearer token claims."""

    sub: str = Field(..., description="Subject (user ID)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class User(BaseModel):
    """
    A stored user record.

    Mirrors the `users` collection. Only the service and repository see
    this model; everything leaving the module is an AuthenticatedUser.
    """

    id: str = Field(..., description="User ID (ObjectId hex)")
    name: str
    email: str
    password_hash: Optional[str] = Field(None, description="bcrypt hash, absent for federated-only accounts")
    federated_id: Optional[str] = Field(None, description="Identity provider subject")
    avatar_url: str = ""
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        """Map a `users` document to a User."""
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            email=doc["email"],
            password_hash=doc.get("passwordHash"),
            federated_id=doc.get("federatedId"),
            avatar_url=doc.get("avatarUrl") or "",
            role=UserRole(doc.get("role", UserRole.USER.value)),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def to_public(self) -> AuthenticatedUser:
        """The view of this user that may leave the auth module."""
        return AuthenticatedUser(
            id=self.id,
            name=self.name,
            email=self.email,
            avatar=self.avatar_url,
            role=self.role.value,
        )


class RegisterRequest(BaseModel):
    """Password registration payload."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Password login payload."""

    email: str = ""
    password: str = ""


class FederatedLoginRequest(BaseModel):
    """Profile asserted by the federated identity provider."""

    federated_id: Optional[str] = Field(None, alias="federatedId")
    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None

    model_config = {"populate_by_name": True}


class AuthResult(BaseModel):
    """Outcome of an enrollment path."""

    token: str
    user: AuthenticatedUser
    created: bool = Field(default=False, description="True if a user was created or linked")


class AuthResponse(BaseModel):
    """Response body for register, login and federated login."""

    message: str
    token: str
    user: AuthenticatedUser


class CurrentUserResponse(BaseModel):
    """Response body for GET /auth/me."""

    user: AuthenticatedUser
