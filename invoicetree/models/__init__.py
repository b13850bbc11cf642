"""
Database models module.
All SQLAlchemy models are exported from here for easy imports.
"""

from invoicetree.models.user import User
from invoicetree.models.company import Company
from invoicetree.models.client import Client
from invoicetree.models.invoice import Invoice, InvoiceItem, InvoiceStatus


__all__ = [
    "User",
    "Company",
    "Client",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
]
