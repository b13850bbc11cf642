"""
Invoice and InvoiceItem models.
Both store their computed money values so that readers never recompute them.
"""

from typing import Optional, List, TYPE_CHECKING
from decimal import Decimal
from datetime import date
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, Numeric, Date, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoicetree.models.base import BaseModel

if TYPE_CHECKING:
    from invoicetree.models.company import Company
    from invoicetree.models.client import Client
    from invoicetree.services.totals import InvoiceTotals, ItemTotals


# Item inputs are capped at 3 decimals (quantity, unit price) and 2 (rates), so
# every derived value and every sum of them fits this scale without rounding.
Money = Numeric(precision=30, scale=10)


class InvoiceStatus(str, Enum):
    """Invoice status enumeration."""
    DRAFT = "draft"
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class Invoice(BaseModel):
    """
    Invoice model.

    Attributes:
        company_id: Issuing company
        client_id: Billed client (may be unset on drafts)
        number: Human-readable invoice number
        status: Current invoice status
        issue_date: Date the invoice was issued
        due_date: Payment due date
        notes: Free-text notes
        terms: Free-text terms
        payment_terms: Free-text payment terms
        subtotal: Sum of item subtotals
        tax_total: Sum of item tax amounts
        discount_total: Sum of item discount amounts
        total: subtotal + tax_total - discount_total
    """

    __tablename__ = "invoices"

    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    client_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    number: Mapped[str] = mapped_column(
        String(50),
        index=True,
        nullable=False,
    )
    status: Mapped[InvoiceStatus] = mapped_column(
        SQLEnum(InvoiceStatus),
        default=InvoiceStatus.DRAFT,
        nullable=False,
    )

    issue_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    due_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    terms: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_terms: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Totals (computed from items at save time)
    subtotal: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    tax_total: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    discount_total: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    total: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)

    company: Mapped["Company"] = relationship(
        "Company",
        back_populates="invoices",
        lazy="joined",
    )
    client: Mapped[Optional["Client"]] = relationship(
        "Client",
        back_populates="invoices",
        lazy="joined",
    )
    items: Mapped[List["InvoiceItem"]] = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
        lazy="selectin",
    )

    def apply_totals(self, totals: "InvoiceTotals") -> None:
        """Copy computed aggregates onto the stored columns."""
        self.subtotal = totals.subtotal
        self.tax_total = totals.tax_total
        self.discount_total = totals.discount_total
        self.total = totals.total

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number='{self.number}', total={self.total})>"


class InvoiceItem(BaseModel):
    """
    Invoice line item model.

    Attributes:
        invoice_id: Owning invoice
        position: Order of the line on the invoice
        description: Item description
        quantity: Number of units
        unit_price: Price per unit
        tax_rate: Tax percentage (0-100)
        discount_rate: Discount percentage (0-100)
        subtotal, tax_amount, discount_amount, total: derived values
    """

    __tablename__ = "invoice_items"

    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    quantity: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(
        Numeric(precision=9, scale=4),
        default=Decimal("0"),
        nullable=False,
    )
    discount_rate: Mapped[Decimal] = mapped_column(
        Numeric(precision=9, scale=4),
        default=Decimal("0"),
        nullable=False,
    )

    # Derived values
    subtotal: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    total: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)

    invoice: Mapped["Invoice"] = relationship(
        "Invoice",
        back_populates="items",
    )

    def apply_totals(self, totals: "ItemTotals") -> None:
        """Copy computed per-line values onto the stored columns."""
        self.subtotal = totals.subtotal
        self.tax_amount = totals.tax_amount
        self.discount_amount = totals.discount_amount
        self.total = totals.total

    def __repr__(self) -> str:
        return f"<InvoiceItem(id={self.id}, description='{self.description[:30]}', total={self.total})>"
