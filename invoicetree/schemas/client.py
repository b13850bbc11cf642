"""
Client schemas for request/response validation.
"""

from pydantic import EmailStr, Field, field_validator

from invoicetree.schemas.base import BaseSchema, TimestampSchema


class ClientBase(BaseSchema):
    """Base client schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    tax_id: str | None = Field(None, max_length=100)
    address: str | None = None
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)


class ClientCreate(ClientBase):
    """
    Schema for creating a client.

    When company_id is omitted the user's first company is used.
    """

    company_id: int | None = None
    email: EmailStr | None = None

    @field_validator("tax_id", "address", "phone", "email", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ClientResponse(ClientBase, TimestampSchema):
    """Client response schema."""

    id: int
    company_id: int


class ClientListItem(ClientResponse):
    """Client row in the registry, with its company name."""

    company_name: str | None = None
