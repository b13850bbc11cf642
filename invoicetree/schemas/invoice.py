"""
Invoice schemas for request/response validation.
"""

from datetime import date, datetime
from decimal import Decimal
from pydantic import Field

from invoicetree.models.invoice import InvoiceStatus
from invoicetree.schemas.base import BaseSchema, TimestampSchema
from invoicetree.schemas.client import ClientResponse
from invoicetree.schemas.company import CompanyResponse
from invoicetree.services.totals import LineItemInput


class InvoiceItemCreate(LineItemInput):
    """
    One line of an invoice as submitted by the editor.

    Missing numbers are read as zero before the range checks run. Quantity
    and unit price take up to 3 decimals, rates up to 2, so derived values are
    stored exactly.
    """

    description: str = Field(default="", max_length=2000)
    quantity: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=3)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=3)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, decimal_places=2)
    discount_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, decimal_places=2)


class InvoiceItemResponse(BaseSchema):
    """Invoice line with its derived values."""

    id: int
    invoice_id: int
    position: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    discount_rate: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total: Decimal


class InvoiceCreate(BaseSchema):
    """
    Schema for creating an invoice.

    Totals are never accepted from the caller; they are computed from items.
    """

    company_id: int | None = None
    client_id: int | None = None
    number: str | None = Field(None, max_length=50)
    issue_date: date = Field(default_factory=date.today)
    due_date: date | None = None
    notes: str | None = None
    terms: str | None = None
    payment_terms: str | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    items: list[InvoiceItemCreate] = Field(default_factory=list)


class InvoiceUpdate(BaseSchema):
    """
    Schema for saving an existing invoice from the editor.

    A field left out of the body keeps its stored value. A field sent as null
    clears it where the column allows (client_id, due_date, notes, terms,
    payment_terms); null on company_id, number, issue_date or status keeps the
    stored value. items follows the same rule: when sent, the list replaces
    every stored item, so an empty list removes them all.
    """

    company_id: int | None = None
    client_id: int | None = None
    number: str | None = Field(None, max_length=50)
    issue_date: date | None = None
    due_date: date | None = None
    notes: str | None = None
    terms: str | None = None
    payment_terms: str | None = None
    status: InvoiceStatus | None = None
    items: list[InvoiceItemCreate] = Field(default_factory=list)


class InvoiceResponse(TimestampSchema):
    """Full invoice with items, issuing company and client."""

    id: int
    company_id: int
    client_id: int | None
    number: str
    status: InvoiceStatus
    issue_date: date
    due_date: date | None
    notes: str | None
    terms: str | None
    payment_terms: str | None
    subtotal: Decimal
    tax_total: Decimal
    discount_total: Decimal
    total: Decimal
    items: list[InvoiceItemResponse]
    company: CompanyResponse | None = None
    client: ClientResponse | None = None


class InvoiceListItem(BaseSchema):
    """Invoice row in the registry."""

    id: int
    number: str
    company_id: int
    company_name: str | None = None
    client_id: int | None = None
    client_name: str | None = None
    issue_date: date
    due_date: date | None
    total: Decimal
    status: InvoiceStatus
    created_at: datetime
