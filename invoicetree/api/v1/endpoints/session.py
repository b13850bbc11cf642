"""
Session gate endpoints.
Tells the client which screen to show and handles first-company onboarding.
"""

from fastapi import APIRouter, status

from invoicetree.api.deps import DbSession, CurrentUser, OptionalUser
from invoicetree.schemas.company import CompanyCreate
from invoicetree.schemas.session import SessionResponse
from invoicetree.services.session import SessionService


router = APIRouter()


@router.get(
    "",
    response_model=SessionResponse,
    summary="Resolve session",
    description="unauthenticated, needs_onboarding or ready",
)
async def get_session(
    user: OptionalUser,
    db: DbSession,
) -> SessionResponse:
    """Resolve the session gate for the caller."""
    service = SessionService(db)
    return await service.resolve(user)


@router.post(
    "/onboarding",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Complete onboarding",
    description="Create the first company of the signed-in user",
)
async def complete_onboarding(
    data: CompanyCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> SessionResponse:
    """Create the user's first company and return the refreshed session."""
    service = SessionService(db)
    return await service.onboard(current_user, data)
