"""
Client model.
The billed party, scoped to one company.
"""

from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import String, Text, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoicetree.models.base import BaseModel

if TYPE_CHECKING:
    from invoicetree.models.company import Company
    from invoicetree.models.invoice import Invoice


class Client(BaseModel):
    """
    Client model representing a billed customer.

    Attributes:
        company_id: Company this client belongs to
        name: Client's full name or company name
        tax_id: Client's tax identification number
        address: Client's postal address
        phone: Client's phone number
        email: Client's email address
    """

    __tablename__ = "clients"

    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    tax_id: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    company: Mapped["Company"] = relationship(
        "Company",
        back_populates="clients",
    )
    invoices: Mapped[List["Invoice"]] = relationship(
        "Invoice",
        back_populates="client",
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}', company_id={self.company_id})>"
