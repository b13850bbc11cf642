"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from invoicetree.api.v1.endpoints import (
    auth,
    session,
    companies,
    clients,
    invoices,
    dashboard,
    settings,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    session.router,
    prefix="/session",
    tags=["Session"],
)

api_router.include_router(
    companies.router,
    prefix="/companies",
    tags=["Companies"],
)

api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["Clients"],
)

api_router.include_router(
    invoices.router,
    prefix="/invoices",
    tags=["Invoices"],
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
)

api_router.include_router(
    settings.router,
    prefix="/settings",
    tags=["Settings"],
)
