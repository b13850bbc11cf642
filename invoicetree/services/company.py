"""
Company service.
Companies are owned by one user; every lookup is scoped by that owner.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from invoicetree.models.company import Company
from invoicetree.models.user import User
from invoicetree.schemas.company import CompanyCreate


logger = logging.getLogger(__name__)


class CompanyService:
    """Service for company operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, owner: User, data: CompanyCreate) -> Company:
        """Create a company owned by the given user."""
        company = Company(
            user_id=owner.id,
            **data.model_dump(),
        )

        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)

        logger.info(f"Company {company.id} created for user {owner.id}")
        return company

    async def list(self, user_id: int) -> list[Company]:
        """List the user's companies, ordered by name."""
        result = await self.db.execute(
            select(Company)
            .where(Company.user_id == user_id)
            .order_by(Company.name, Company.id)
        )
        return list(result.scalars().all())

    async def has_company(self, user_id: int) -> bool:
        """Check whether the user owns at least one company."""
        result = await self.db.execute(
            select(Company.id).where(Company.user_id == user_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def first(self, user_id: int) -> Company | None:
        """The company preselected by the editors: the user's oldest one."""
        result = await self.db.execute(
            select(Company)
            .where(Company.user_id == user_id)
            .order_by(Company.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, company_id: int, user_id: int) -> Company | None:
        """Get a company, ensuring the user owns it."""
        result = await self.db.execute(
            select(Company).where(
                Company.id == company_id,
                Company.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, company_id: int, user_id: int) -> Company:
        """Get company by ID or raise 404."""
        company = await self.get_by_id(company_id, user_id)
        if not company:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found",
            )
        return company

    async def resolve(self, company_id: int | None, user_id: int) -> Company:
        """
        Resolve the company a new record belongs to.

        An explicit ID must be one of the user's companies; without one the
        user's first company is used.
        """
        if company_id is not None:
            return await self.get_or_404(company_id, user_id)

        company = await self.first(user_id)
        if not company:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Create a company first",
            )
        return company
