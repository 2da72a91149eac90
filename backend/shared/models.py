"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This is the public view of a stored user: it is resolved from the
    bearer token and made available to route handlers via dependency
    injection. The password hash never appears here.
    """

    id: str = Field(..., description="User ID (MongoDB ObjectId as hex)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User's email address")
    avatar: str = Field(default="", description="Avatar URL")
    role: str = Field(default="user", description="User role")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
