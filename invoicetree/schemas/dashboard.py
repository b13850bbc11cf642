"""
Dashboard schemas.
"""

from decimal import Decimal

from invoicetree.schemas.base import BaseSchema


class DashboardStats(BaseSchema):
    """Aggregate figures shown on the dashboard."""

    total_invoices: int = 0
    pending_invoices: int = 0
    total_revenue: Decimal = Decimal("0")
    active_clients: int = 0
