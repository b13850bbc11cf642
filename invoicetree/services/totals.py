"""
Invoice total computation.

Per line:
    subtotal        = quantity * unit_price
    tax_amount      = subtotal * tax_rate / 100
    discount_amount = subtotal * discount_rate / 100
    total           = subtotal + tax_amount - discount_amount

Tax and discount are both taken from the line's own subtotal. Nothing is
rounded here; values are rounded to cents only when formatted for display.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


ZERO = Decimal("0")
HUNDRED = Decimal("100")


class LineItemInput(BaseModel):
    """
    Inputs of one invoice line.

    Every numeric field defaults to zero, and a missing value (None or an
    empty form field) is read as zero as well.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    description: str = ""
    quantity: Decimal = ZERO
    unit_price: Decimal = ZERO
    tax_rate: Decimal = ZERO
    discount_rate: Decimal = ZERO

    @field_validator("quantity", "unit_price", "tax_rate", "discount_rate", mode="before")
    @classmethod
    def _missing_is_zero(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return ZERO
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _missing_description(cls, value: Any) -> Any:
        return "" if value is None else value


class ItemTotals(BaseModel):
    """Derived money values of one line."""

    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    total: Decimal = ZERO


class InvoiceTotals(BaseModel):
    """Aggregated money values of an invoice."""

    subtotal: Decimal = ZERO
    tax_total: Decimal = ZERO
    discount_total: Decimal = ZERO
    total: Decimal = ZERO


def as_line_item(item: Any) -> LineItemInput:
    """Read a mapping, an ORM row or a schema object as a LineItemInput."""
    if isinstance(item, LineItemInput):
        return item
    if isinstance(item, Mapping):
        return LineItemInput.model_validate(dict(item))
    return LineItemInput.model_validate(item, from_attributes=True)


def compute_item_totals(item: Any) -> ItemTotals:
    """Compute the derived values of a single line."""
    line = as_line_item(item)

    subtotal = line.quantity * line.unit_price
    tax_amount = subtotal * (line.tax_rate / HUNDRED)
    discount_amount = subtotal * (line.discount_rate / HUNDRED)

    return ItemTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        discount_amount=discount_amount,
        total=subtotal + tax_amount - discount_amount,
    )


def sum_item_totals(lines: Iterable[ItemTotals]) -> InvoiceTotals:
    """Aggregate already computed line values into invoice totals."""
    subtotal = tax_total = discount_total = ZERO

    for line in lines:
        subtotal += line.subtotal
        tax_total += line.tax_amount
        discount_total += line.discount_amount

    return InvoiceTotals(
        subtotal=subtotal,
        tax_total=tax_total,
        discount_total=discount_total,
        total=subtotal + tax_total - discount_total,
    )


def compute_invoice_totals(items: Iterable[Any]) -> InvoiceTotals:
    """Compute invoice totals for any number of lines, including none."""
    return sum_item_totals(compute_item_totals(item) for item in items)
