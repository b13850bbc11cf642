"""
Authentication service.
Handles sign-up, sign-in, token refresh and sign-out.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from invoicetree.models.user import User
from invoicetree.schemas.auth import RegisterRequest, LoginRequest
from invoicetree.core.security import (
    get_password_hash,
    verify_password,
    create_token_pair,
    decode_token,
    TokenPair,
)


logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, data: RegisterRequest) -> User:
        """
        Register a new user.

        Raises:
            HTTPException: If the email is already registered
        """
        existing = await self.get_user_by_email(data.email)
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An account with this email already exists",
            )

        user = User(
            email=data.email,
            hashed_password=get_password_hash(data.password),
            full_name=data.full_name,
        )

        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)

        logger.info(f"User registered: {user.email}")
        return user

    async def login(self, data: LoginRequest) -> tuple[User, TokenPair]:
        """
        Authenticate user and generate tokens.

        Raises:
            HTTPException: If credentials are invalid or the account is disabled
        """
        user = await self.get_user_by_email(data.email)

        if not user or not verify_password(data.password, user.hashed_password):
            logger.warning(f"Failed sign-in for {data.email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account disabled",
            )

        return user, create_token_pair(user.id, user.email, user.session_version)

    async def refresh_token(self, refresh_token: str) -> TokenPair:
        """
        Generate a new token pair from a refresh token.

        Raises:
            HTTPException: If the refresh token is invalid or revoked
        """
        token_data = decode_token(refresh_token)

        if token_data is None or token_data.token_type != "refresh":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid refresh token",
            )

        user = await self.get_user_by_id(token_data.user_id)

        if not user or user.session_version != token_data.session_version:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid refresh token",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account disabled",
            )

        return create_token_pair(user.id, user.email, user.session_version)

    async def logout(self, user: User) -> None:
        """Revoke every token issued to the user so far."""
        user.session_version += 1
        await self.db.flush()
        logger.info(f"User signed out: {user.email}")

    async def get_user_by_id(self, user_id: int | None) -> User | None:
        """Get user by ID."""
        if user_id is None:
            return None
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        result = await self.db.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()
