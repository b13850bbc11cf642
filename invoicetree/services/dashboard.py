"""
Dashboard service.
Aggregates invoice and client figures for the current user's companies.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from invoicetree.models.client import Client
from invoicetree.models.company import Company
from invoicetree.models.invoice import Invoice, InvoiceStatus
from invoicetree.schemas.dashboard import DashboardStats


logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(value: Any) -> Decimal:
    """
    Read a stored total as a Decimal.

    Anything that is not a finite number reads as zero. Text is parsed up to
    the end of its leading number, so "12.5 USD" reads as 12.5.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")

    if isinstance(value, (Decimal, int, float)):
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return Decimal("0")
        try:
            amount = Decimal(match.group(0).strip())
        except InvalidOperation:
            return Decimal("0")
    else:
        return Decimal("0")

    if not amount.is_finite():
        return Decimal("0")
    return amount


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def aggregate_dashboard(invoices: Iterable[Any], client_count: int | None) -> DashboardStats:
    """
    Aggregate an invoice set into dashboard figures.

    Revenue only counts invoices whose status is "paid"; the pending count only
    counts "pending". Malformed totals contribute zero.
    """
    total_invoices = 0
    pending_invoices = 0
    total_revenue = Decimal("0")

    for invoice in invoices:
        total_invoices += 1
        status = _field(invoice, "status")

        if status == InvoiceStatus.PENDING:
            pending_invoices += 1
        elif status == InvoiceStatus.PAID:
            total_revenue += parse_amount(_field(invoice, "total"))

    return DashboardStats(
        total_invoices=total_invoices,
        pending_invoices=pending_invoices,
        total_revenue=total_revenue,
        active_clients=client_count or 0,
    )


class DashboardService:
    """Service for dashboard statistics."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stats(self, user_id: int) -> DashboardStats:
        """
        Get dashboard statistics for every company the user owns.

        Returns all zeros when the user has no company yet.
        """
        company_result = await self.db.execute(
            select(Company.id).where(Company.user_id == user_id)
        )
        company_ids = list(company_result.scalars().all())

        if not company_ids:
            return aggregate_dashboard([], 0)

        invoice_result = await self.db.execute(
            select(Invoice.status, Invoice.total).where(
                Invoice.company_id.in_(company_ids),
            )
        )
        invoices = invoice_result.all()

        client_result = await self.db.execute(
            select(func.count(Client.id)).where(
                Client.company_id.in_(company_ids),
            )
        )
        client_count = client_result.scalar() or 0

        stats = aggregate_dashboard(invoices, client_count)
        logger.debug(
            f"Dashboard for user {user_id}: {stats.total_invoices} invoices, "
            f"{stats.active_clients} clients"
        )
        return stats
