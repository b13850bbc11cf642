"""
Invoice service.
Handles invoice CRUD and keeps stored totals in step with line items.
"""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from fastapi import HTTPException, status

from invoicetree.models.client import Client
from invoicetree.models.company import Company
from invoicetree.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from invoicetree.models.user import User
from invoicetree.schemas.invoice import InvoiceCreate, InvoiceUpdate
from invoicetree.services.client import ClientService
from invoicetree.services.company import CompanyService
from invoicetree.services.totals import (
    LineItemInput,
    as_line_item,
    compute_item_totals,
    sum_item_totals,
)


logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.companies = CompanyService(db)
        self.clients = ClientService(db)

    async def _generate_number(self, company_id: int) -> str:
        """
        Generate the next invoice number for a company.
        Format: INV-{year}-{sequence}, one past the highest sequence in use.
        """
        prefix = f"INV-{date.today().year}-"

        result = await self.db.execute(
            select(Invoice.number).where(
                Invoice.company_id == company_id,
                Invoice.number.like(f"{prefix}%"),
            )
        )
        sequences = [
            int(suffix)
            for suffix in (number[len(prefix):] for number in result.scalars())
            if suffix.isdigit()
        ]
        last = max(sequences, default=0)

        return f"{prefix}{str(last + 1).zfill(5)}"

    async def _check_client(self, client_id: int | None, company: Company, user_id: int) -> None:
        """A client, when given, must belong to the invoice's company."""
        if client_id is None:
            return

        client = await self.clients.get_by_id(client_id, user_id)
        if not client or client.company_id != company.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Client not found",
            )

    async def _insert_items(self, invoice: Invoice, items: list[LineItemInput]) -> None:
        for position, data in enumerate(items):
            item = InvoiceItem(
                invoice_id=invoice.id,
                position=position,
                description=data.description,
                quantity=data.quantity,
                unit_price=data.unit_price,
                tax_rate=data.tax_rate,
                discount_rate=data.discount_rate,
            )
            item.apply_totals(compute_item_totals(data))
            self.db.add(item)

        await self.db.flush()

    async def create(self, owner: User, data: InvoiceCreate) -> Invoice:
        """
        Create a new invoice with its items.

        Args:
            owner: Current user
            data: Invoice data with items

        Returns:
            Created invoice with items, company and client loaded
        """
        company = await self.companies.resolve(data.company_id, owner.id)
        await self._check_client(data.client_id, company, owner.id)

        number = data.number or await self._generate_number(company.id)
        totals = sum_item_totals(compute_item_totals(item) for item in data.items)

        invoice = Invoice(
            company_id=company.id,
            client_id=data.client_id,
            number=number,
            issue_date=data.issue_date,
            due_date=data.due_date,
            notes=data.notes,
            terms=data.terms,
            payment_terms=data.payment_terms,
            status=data.status,
        )
        invoice.apply_totals(totals)

        self.db.add(invoice)
        await self.db.flush()

        await self._insert_items(invoice, data.items)

        logger.info(f"Invoice {invoice.number} created with {len(data.items)} items, total {totals.total}")
        return await self.get_or_404(invoice.id, owner.id)

    async def get_by_id(self, invoice_id: int, user_id: int) -> Invoice | None:
        """Get an invoice of one of the user's companies, fully loaded."""
        result = await self.db.execute(
            select(Invoice)
            .join(Company, Invoice.company_id == Company.id)
            .where(
                Invoice.id == invoice_id,
                Company.user_id == user_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.unique().scalar_one_or_none()

    async def get_or_404(self, invoice_id: int, user_id: int) -> Invoice:
        """Get invoice by ID or raise 404."""
        invoice = await self.get_by_id(invoice_id, user_id)
        if not invoice:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Invoice not found",
            )
        return invoice

    async def list(
        self,
        user_id: int,
        status: InvoiceStatus | None = None,
        company_id: int | None = None,
    ) -> list[dict]:
        """
        List the user's invoices with company and client names, newest first.
        """
        query = (
            select(
                Invoice.id,
                Invoice.number,
                Invoice.company_id,
                Company.name.label("company_name"),
                Invoice.client_id,
                Client.name.label("client_name"),
                Invoice.issue_date,
                Invoice.due_date,
                Invoice.total,
                Invoice.status,
                Invoice.created_at,
            )
            .join(Company, Invoice.company_id == Company.id)
            .outerjoin(Client, Invoice.client_id == Client.id)
            .where(Company.user_id == user_id)
        )

        if status:
            query = query.where(Invoice.status == status)

        if company_id:
            query = query.where(Invoice.company_id == company_id)

        query = query.order_by(Invoice.created_at.desc(), Invoice.id.desc())
        result = await self.db.execute(query)

        return [row._asdict() for row in result.all()]

    async def update(self, invoice: Invoice, owner: User, data: InvoiceUpdate) -> Invoice:
        """
        Save an invoice from the editor.

        Only the fields present in the body are written. The invoice row is
        written first with totals recomputed from the item set, then every
        stored item is deleted and the set inserted again. Items are never
        merged; without an items list the stored lines are carried over.
        """
        sent = data.model_fields_set

        company = invoice.company
        if data.company_id is not None and data.company_id != invoice.company_id:
            company = await self.companies.get_or_404(data.company_id, owner.id)

        client_id = data.client_id if "client_id" in sent else invoice.client_id
        await self._check_client(client_id, company, owner.id)

        if "items" in sent:
            items = list(data.items)
        else:
            items = [as_line_item(item) for item in invoice.items]
        totals = sum_item_totals(compute_item_totals(item) for item in items)

        invoice.company_id = company.id
        invoice.client_id = client_id
        for field in ("number", "issue_date", "status"):
            value = getattr(data, field)
            if value is not None:
                setattr(invoice, field, value)
        for field in ("due_date", "notes", "terms", "payment_terms"):
            if field in sent:
                setattr(invoice, field, getattr(data, field))
        invoice.apply_totals(totals)
        await self.db.flush()

        # Stored totals and stored items only agree once both writes below land.
        await self.db.execute(
            delete(InvoiceItem).where(InvoiceItem.invoice_id == invoice.id)
        )
        await self._insert_items(invoice, items)

        logger.info(f"Invoice {invoice.number} saved with {len(items)} items, total {totals.total}")
        return await self.get_or_404(invoice.id, owner.id)

    async def delete(self, invoice: Invoice) -> None:
        """Delete an invoice together with its items."""
        number = invoice.number
        await self.db.delete(invoice)
        await self.db.flush()
        logger.info(f"Invoice {number} deleted")
