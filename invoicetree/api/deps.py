"""
API Dependencies.
Common dependencies for authentication and database sessions.
"""

import logging
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from invoicetree.core.database import get_db
from invoicetree.core.security import decode_token
from invoicetree.models.user import User


logger = logging.getLogger(__name__)

# Bearer token scheme; missing credentials are handled by the dependencies below
security = HTTPBearer(auto_error=False)


async def _user_from_token(token: str, db: AsyncSession) -> tuple[Optional[User], str]:
    """
    Resolve the user an access token belongs to.

    Returns:
        (user, reason); user is None when the token is rejected
    """
    token_data = decode_token(token)

    if token_data is None:
        return None, "Invalid or expired token"

    if token_data.token_type != "access":
        return None, "Invalid token type"

    if token_data.user_id is None:
        return None, "Token without user identifier"

    result = await db.execute(
        select(User).where(User.id == token_data.user_id)
    )
    user = result.scalar_one_or_none()

    if user is None:
        return None, f"User {token_data.user_id} not found"

    if user.session_version != token_data.session_version:
        return None, f"Revoked token for {user.email}"

    return user, ""


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current user from the JWT bearer token.

    Raises:
        HTTPException: If the token is missing, invalid or revoked
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not credentials:
        logger.warning("Access attempt without token")
        raise credentials_exception

    user, reason = await _user_from_token(credentials.credentials, db)

    if user is None:
        logger.warning(reason)
        raise credentials_exception

    logger.debug(f"Authenticated user: {user.email}")
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Get the current active user.

    Raises:
        HTTPException: If the account is disabled
    """
    if not current_user.is_active:
        logger.warning(f"Disabled account: {current_user.email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account disabled",
        )
    return current_user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Get the current user if a valid token was sent, None otherwise."""
    if not credentials:
        return None

    user, reason = await _user_from_token(credentials.credentials, db)

    if user is None:
        logger.info(f"Session treated as signed out: {reason}")
        return None

    if not user.is_active:
        return None

    return user


# Type aliases for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_active_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
