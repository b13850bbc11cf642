"""
Client service.
Clients belong to a company; access is scoped through the company's owner.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from invoicetree.models.client import Client
from invoicetree.models.company import Company
from invoicetree.models.user import User
from invoicetree.schemas.client import ClientCreate
from invoicetree.services.company import CompanyService


logger = logging.getLogger(__name__)


class ClientService:
    """Service for client operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.companies = CompanyService(db)

    async def create(self, owner: User, data: ClientCreate) -> Client:
        """
        Create a new client.

        Args:
            owner: Current user
            data: Client data; company_id defaults to the user's first company

        Returns:
            Created client
        """
        company = await self.companies.resolve(data.company_id, owner.id)

        client = Client(
            company_id=company.id,
            **data.model_dump(exclude={"company_id"}),
        )

        self.db.add(client)
        await self.db.flush()
        await self.db.refresh(client)

        logger.info(f"Client {client.id} created for company {company.id}")
        return client

    async def list_for_company(self, company_id: int, user_id: int) -> list[Client]:
        """List the clients of one of the user's companies."""
        await self.companies.get_or_404(company_id, user_id)

        result = await self.db.execute(
            select(Client)
            .where(Client.company_id == company_id)
            .order_by(Client.name, Client.id)
        )
        return list(result.scalars().all())

    async def list(self, user_id: int) -> list[tuple[Client, str]]:
        """
        List the clients of every company the user owns.

        Returns:
            (client, company name) pairs, newest first
        """
        result = await self.db.execute(
            select(Client, Company.name)
            .join(Company, Client.company_id == Company.id)
            .where(Company.user_id == user_id)
            .order_by(Client.created_at.desc(), Client.id.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get_by_id(self, client_id: int, user_id: int) -> Client | None:
        """Get a client, ensuring it belongs to one of the user's companies."""
        result = await self.db.execute(
            select(Client)
            .join(Company, Client.company_id == Company.id)
            .where(
                Client.id == client_id,
                Company.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
