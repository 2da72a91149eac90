"""
Auth API endpoints.

Password registration and login, federated identity login, the current
user lookup, and logout.
"""

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from api.models.common import MessageResponse
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    CurrentUserResponse,
    FederatedLoginRequest,
    LoginRequest,
    RegisterRequest,
)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register with name, email and password.

    Returns 400 if the email is taken or a field is invalid.
    """
    result = await service.register(request.name, request.email, request.password)
    return AuthResponse(message="User registered successfully", token=result.token, user=result.user)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Log in with email and password."""
    result = await service.login(request.email, request.password)
    return AuthResponse(message="Login successful", token=result.token, user=result.user)


@router.post("/federated", response_model=AuthResponse)
async def federated_login(
    request: FederatedLoginRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Log in with a federated identity.

    Answers 200 when the identity was already linked, 201 when it was
    linked to an existing email or a new user was created.
    """
    result = await service.login_federated(
        request.federated_id,
        request.name,
        request.email,
        request.avatar,
    )
    if not result.created:
        return AuthResponse(message="Login successful", token=result.token, user=result.user)

    response.status_code = status.HTTP_201_CREATED
    return AuthResponse(
        message="Federated authentication successful",
        token=result.token,
        user=result.user,
    )


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
) -> CurrentUserResponse:
    """Get the current user's public profile."""
    return CurrentUserResponse(user=user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
) -> MessageResponse:
    """
    Acknowledge a logout.

    Tokens are stateless; the client discards its token.
    """
    return MessageResponse(message="Logout successful")
