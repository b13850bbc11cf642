"""
Company registry endpoints.
"""

from fastapi import APIRouter, status

from invoicetree.api.deps import DbSession, CurrentUser
from invoicetree.schemas.client import ClientResponse
from invoicetree.schemas.company import CompanyCreate, CompanyResponse
from invoicetree.services.client import ClientService
from invoicetree.services.company import CompanyService


router = APIRouter()


@router.get(
    "",
    response_model=list[CompanyResponse],
    summary="List companies",
)
async def list_companies(
    current_user: CurrentUser,
    db: DbSession,
) -> list[CompanyResponse]:
    """List the companies of the signed-in user."""
    service = CompanyService(db)
    companies = await service.list(current_user.id)
    return [CompanyResponse.model_validate(c) for c in companies]


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
)
async def create_company(
    data: CompanyCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> CompanyResponse:
    """Create a company for the signed-in user."""
    service = CompanyService(db)
    company = await service.create(current_user, data)
    return CompanyResponse.model_validate(company)


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Company details",
)
async def get_company(
    company_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> CompanyResponse:
    """Get one of the user's companies."""
    service = CompanyService(db)
    company = await service.get_or_404(company_id, current_user.id)
    return CompanyResponse.model_validate(company)


@router.get(
    "/{company_id}/clients",
    response_model=list[ClientResponse],
    summary="Clients of a company",
    description="Client picker of the invoice editor",
)
async def list_company_clients(
    company_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> list[ClientResponse]:
    """List the clients of one company."""
    service = ClientService(db)
    clients = await service.list_for_company(company_id, current_user.id)
    return [ClientResponse.model_validate(c) for c in clients]
