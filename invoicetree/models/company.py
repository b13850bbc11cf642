"""
Company model.
The billing entity that issues invoices, owned by a single user.
"""

from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import String, Text, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoicetree.models.base import BaseModel

if TYPE_CHECKING:
    from invoicetree.models.user import User
    from invoicetree.models.client import Client
    from invoicetree.models.invoice import Invoice


class Company(BaseModel):
    """
    Company model.

    Attributes:
        user_id: Owning user
        name: Company name
        tax_id: Tax / VAT identifier
        address: Postal address
        phone: Contact phone number
        email: Contact email
        logo_url: Optional logo reference
    """

    __tablename__ = "companies"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
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
    logo_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    owner: Mapped["User"] = relationship(
        "User",
        back_populates="companies",
    )
    clients: Mapped[List["Client"]] = relationship(
        "Client",
        back_populates="company",
        cascade="all, delete-orphan",
    )
    invoices: Mapped[List["Invoice"]] = relationship(
        "Invoice",
        back_populates="company",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}', user_id={self.user_id})>"
