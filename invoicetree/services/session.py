"""
Session gate.
Decides where a caller belongs: sign-in, company onboarding, or the app.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from invoicetree.models.user import User
from invoicetree.schemas.auth import UserResponse
from invoicetree.schemas.company import CompanyCreate
from invoicetree.schemas.session import SessionResponse, SessionState
from invoicetree.services.company import CompanyService


logger = logging.getLogger(__name__)


class SessionService:
    """
    Point-in-time session gate.

    The company check runs once per call and is never cached, so a company
    created later shows up on the next resolve.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.companies = CompanyService(db)

    async def resolve(self, user: User | None) -> SessionResponse:
        """Resolve the gate state for an optional user."""
        if user is None:
            return SessionResponse(state=SessionState.UNAUTHENTICATED)

        try:
            has_company = await self.companies.has_company(user.id)
        except SQLAlchemyError:
            logger.error(f"Company check failed for user {user.id}", exc_info=True)
            has_company = False

        return SessionResponse(
            state=SessionState.READY if has_company else SessionState.NEEDS_ONBOARDING,
            user=UserResponse.model_validate(user),
        )

    async def onboard(self, user: User, data: CompanyCreate) -> SessionResponse:
        """
        Create the user's first company and re-resolve the gate.

        Raises:
            HTTPException: If the user already has a company
        """
        if await self.companies.has_company(user.id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Onboarding already completed",
            )

        await self.companies.create(user, data)
        return await self.resolve(user)
