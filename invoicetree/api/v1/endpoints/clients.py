"""
Client registry endpoints.
"""

from fastapi import APIRouter, status

from invoicetree.api.deps import DbSession, CurrentUser
from invoicetree.schemas.client import ClientCreate, ClientResponse, ClientListItem
from invoicetree.services.client import ClientService


router = APIRouter()


@router.get(
    "",
    response_model=list[ClientListItem],
    summary="List clients",
    description="Clients of every company of the signed-in user",
)
async def list_clients(
    current_user: CurrentUser,
    db: DbSession,
) -> list[ClientListItem]:
    """List all clients, newest first."""
    service = ClientService(db)
    rows = await service.list(current_user.id)
    return [
        ClientListItem.model_validate(client).model_copy(update={"company_name": company_name})
        for client, company_name in rows
    ]


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a client",
    description="company_id defaults to the user's first company",
)
async def create_client(
    data: ClientCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ClientResponse:
    """Create a new client."""
    service = ClientService(db)
    client = await service.create(current_user, data)
    return ClientResponse.model_validate(client)
