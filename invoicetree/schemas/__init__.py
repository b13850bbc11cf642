"""
Pydantic schemas for request/response validation.
"""

from invoicetree.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenPair,
    RefreshTokenRequest,
    UserResponse,
)
from invoicetree.schemas.company import (
    CompanyCreate,
    CompanyResponse,
)
from invoicetree.schemas.client import (
    ClientCreate,
    ClientResponse,
    ClientListItem,
)
from invoicetree.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceResponse,
    InvoiceListItem,
    InvoiceItemCreate,
    InvoiceItemResponse,
)
from invoicetree.schemas.dashboard import DashboardStats
from invoicetree.schemas.session import SessionState, SessionResponse
from invoicetree.schemas.preferences import Preferences

__all__ = [
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "TokenPair",
    "RefreshTokenRequest",
    "UserResponse",
    # Company
    "CompanyCreate",
    "CompanyResponse",
    # Client
    "ClientCreate",
    "ClientResponse",
    "ClientListItem",
    # Invoice
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceResponse",
    "InvoiceListItem",
    "InvoiceItemCreate",
    "InvoiceItemResponse",
    # Dashboard / session / settings
    "DashboardStats",
    "SessionState",
    "SessionResponse",
    "Preferences",
]
