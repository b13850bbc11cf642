"""
Invoice endpoints.
Registry, editor save, deletion and PDF export.
"""

from fastapi import APIRouter, Query, Response, status

from invoicetree.api.deps import DbSession, CurrentUser
from invoicetree.models.invoice import InvoiceStatus
from invoicetree.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceResponse,
    InvoiceListItem,
)
from invoicetree.schemas.base import MessageResponse
from invoicetree.services.invoice import InvoiceService
from invoicetree.services.pdf import PDFService


router = APIRouter()


@router.get(
    "",
    response_model=list[InvoiceListItem],
    summary="List invoices",
    description="Invoices of the user's companies, newest first",
)
async def list_invoices(
    current_user: CurrentUser,
    db: DbSession,
    status: InvoiceStatus | None = Query(None, description="Filter by status"),
    company_id: int | None = Query(None, description="Filter by company"),
) -> list[InvoiceListItem]:
    """List invoices with company and client names."""
    service = InvoiceService(db)
    rows = await service.list(current_user.id, status=status, company_id=company_id)
    return [InvoiceListItem.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an invoice",
    description="Totals are computed from the submitted items",
)
async def create_invoice(
    data: InvoiceCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> InvoiceResponse:
    """Create a new invoice with its items."""
    service = InvoiceService(db)
    invoice = await service.create(current_user, data)
    return InvoiceResponse.model_validate(invoice)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Invoice details",
)
async def get_invoice(
    invoice_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> InvoiceResponse:
    """Get an invoice with items, company and client."""
    service = InvoiceService(db)
    invoice = await service.get_or_404(invoice_id, current_user.id)
    return InvoiceResponse.model_validate(invoice)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Save an invoice",
    description="Replaces every item of the invoice with the submitted ones",
)
async def update_invoice(
    invoice_id: int,
    data: InvoiceUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> InvoiceResponse:
    """Save the invoice editor."""
    service = InvoiceService(db)
    invoice = await service.get_or_404(invoice_id, current_user.id)
    invoice = await service.update(invoice, current_user, data)
    return InvoiceResponse.model_validate(invoice)


@router.delete(
    "/{invoice_id}",
    response_model=MessageResponse,
    summary="Delete an invoice",
)
async def delete_invoice(
    invoice_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    """Delete an invoice and its items."""
    service = InvoiceService(db)
    invoice = await service.get_or_404(invoice_id, current_user.id)
    await service.delete(invoice)
    return MessageResponse(message="Invoice deleted")


@router.get(
    "/{invoice_id}/pdf",
    summary="Download PDF",
    description="Render the invoice as a PDF document",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_invoice_pdf(
    invoice_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> Response:
    """Render and download the invoice PDF."""
    service = InvoiceService(db)
    invoice = await service.get_or_404(invoice_id, current_user.id)

    pdf_service = PDFService()
    pdf = pdf_service.render_invoice(invoice)

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="invoice_{invoice.number}.pdf"'},
    )
