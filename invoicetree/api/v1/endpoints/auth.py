"""
Authentication endpoints.
Sign-up, sign-in, refresh, sign-out and current session.
"""

from fastapi import APIRouter, status

from invoicetree.api.deps import DbSession, CurrentUser
from invoicetree.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenPair,
    RefreshTokenRequest,
    UserResponse,
)
from invoicetree.schemas.base import MessageResponse
from invoicetree.services.auth import AuthService


router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create a new user account",
)
async def register(
    data: RegisterRequest,
    db: DbSession,
) -> UserResponse:
    """Register a new user."""
    service = AuthService(db)
    user = await service.register(data)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenPair,
    summary="Sign in",
    description="Sign in with email and password",
)
async def login(
    data: LoginRequest,
    db: DbSession,
) -> TokenPair:
    """Sign in and receive a JWT token pair."""
    service = AuthService(db)
    _, tokens = await service.login(data)
    return tokens


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh tokens",
    description="Exchange a refresh token for a new token pair",
)
async def refresh_token(
    data: RefreshTokenRequest,
    db: DbSession,
) -> TokenPair:
    """Refresh the JWT token pair."""
    service = AuthService(db)
    tokens = await service.refresh_token(data.refresh_token)
    return tokens


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Sign out",
    description="Revoke every token issued to the current user",
)
async def logout(
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    """Sign out everywhere."""
    service = AuthService(db)
    await service.logout(current_user)
    return MessageResponse(message="Signed out")


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    description="Get the signed-in user",
)
async def get_current_user(
    current_user: CurrentUser,
) -> UserResponse:
    """Return the signed-in user."""
    return UserResponse.model_validate(current_user)
