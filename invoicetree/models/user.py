"""
User model for authentication.
A user owns one or more companies; everything else is scoped through them.
"""

from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import String, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoicetree.models.base import BaseModel

if TYPE_CHECKING:
    from invoicetree.models.company import Company


class User(BaseModel):
    """
    User model.

    Attributes:
        email: Unique email for authentication
        hashed_password: Bcrypt hashed password
        full_name: Optional display name
        is_active: Whether the account is active
        session_version: Bumped on sign-out to revoke outstanding tokens
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    full_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    session_version: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    companies: Mapped[List["Company"]] = relationship(
        "Company",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
