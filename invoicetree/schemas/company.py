"""
Company schemas for request/response validation.
"""

from pydantic import EmailStr, Field, field_validator

from invoicetree.schemas.base import BaseSchema, TimestampSchema


class CompanyBase(BaseSchema):
    """Base company schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    tax_id: str | None = Field(None, max_length=100)
    address: str | None = None
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    logo_url: str | None = Field(None, max_length=500)


class CompanyCreate(CompanyBase):
    """Schema for creating a company (onboarding and registry)."""

    email: EmailStr | None = None

    @field_validator("tax_id", "address", "phone", "email", "logo_url", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        """Empty form fields are stored as NULL."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CompanyResponse(CompanyBase, TimestampSchema):
    """Company response schema."""

    id: int
    user_id: int
