"""
Dashboard endpoints.
"""

from fastapi import APIRouter

from invoicetree.api.deps import DbSession, CurrentUser
from invoicetree.schemas.dashboard import DashboardStats
from invoicetree.services.dashboard import DashboardService


router = APIRouter()


@router.get(
    "",
    response_model=DashboardStats,
    summary="Dashboard statistics",
    description="Invoice count, pending count, paid revenue and client count",
)
async def get_dashboard(
    current_user: CurrentUser,
    db: DbSession,
) -> DashboardStats:
    """Get the dashboard figures."""
    service = DashboardService(db)
    return await service.get_stats(current_user.id)
