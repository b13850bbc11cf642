"""
User preference schemas (settings screen).
"""

from typing import Literal

from invoicetree.schemas.base import BaseSchema


Currency = Literal["USD", "EUR", "GBP", "COP"]
PaymentTerms = Literal["Net 30", "Net 15", "Net 7", "Due on Receipt"]


class Preferences(BaseSchema):
    """Invoice defaults chosen on the settings screen."""

    default_currency: Currency = "USD"
    default_payment_terms: PaymentTerms = "Net 30"
    default_notes: str = ""
    default_terms: str = ""
    email_notifications: bool = True
    dark_mode: bool = True
