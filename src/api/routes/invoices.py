"""Invoice API Routes

FastAPI routes for the invoice lifecycle: issuing, reviewing, correcting,
paying and exporting invoices.
"""

import base64
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    ResubmitInvoiceRequestSchema,
    UpdateStatusRequestSchema,
)
from src.app.services.actor_directory import ActorProfile
from src.app.use_cases.invoicing import (
    CreateInvoice,
    UpdateInvoiceAfterCorrection,
    UpdateInvoiceStatus,
    GetInvoice,
    ListInvoices,
    ListEligibleBuyers,
    GenerateInvoicePdf,
    CreateInvoiceCommandDTO,
    ResubmitInvoiceCommandDTO,
    UpdateStatusCommandDTO,
    InvoiceResponseDTO,
    ListInvoicesResponseDTO,
    ListBuyersResponseDTO,
    InvoicePdfResponseDTO,
)
from src.app.use_cases.invoicing.errors import not_authorized
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.services.actor_directory import SqlAlchemyActorDirectory
from src.adapter.services.invoice_number_allocator import SqlAlchemyInvoiceNumberAllocator
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.actor import ActorRole
from src.domain.invoice import InvoiceStatus
from src.depends import get_current_actor, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _error_example(code: str, message: str, description: str) -> dict:
    return {
        "description": description,
        "content": {
            "application/json": {
                "example": {"error": {"code": code, "message": message}}
            }
        },
    }


NOT_FOUND_RESPONSE = _error_example(
    "INVOICE_NOT_FOUND", "Invoice with ID 123 not found", "Invoice not found"
)
FORBIDDEN_RESPONSE = _error_example(
    "NOT_AUTHORIZED", "Not authorized to view this invoice", "Actor may not perform this action"
)


def _unwrap(result):
    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


def _require_role(actor: ActorProfile, role: ActorRole) -> None:
    if actor.role != role:
        raise ClientError.from_error(
            not_authorized(
                f"Only {role.value}s can list these invoices",
                reason=f"actor {actor.actor_id} is a {actor.role.value}",
            )
        )


def _pdf_use_case(session: AsyncSession) -> GenerateInvoicePdf:
    return GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyActorDirectory(session),
        ReportLabPdfService(),
        currency=ApplicationConfig.INVOICE_CURRENCY,
    )


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: _error_example(
            "DISCOUNT_EXCEEDS_SUBTOTAL",
            "Discount cannot be greater than subtotal",
            "Validation error",
        ),
        403: _error_example(
            "NOT_AUTHORIZED", "Only sellers can create invoices", "Caller is not a seller"
        ),
        404: _error_example(
            "BUYER_KYC_INCOMPLETE",
            "Buyer has not completed KYC verification",
            "Buyer missing or not verified",
        ),
        409: _error_example(
            "INVOICE_NUMBER_CONFLICT",
            "Could not allocate a unique invoice number",
            "Numbering conflict persisted after retries",
        ),
    },
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Issue a new invoice to a KYC-verified buyer.

    The caller must be a seller. Line totals, subtotal and total are computed
    server-side and rounded half-up to two decimals. The invoice starts in
    status `sent` with the next `INV-######` number.

    **Request body:**
    - `buyer_id` (required): Buyer actor ID
    - `due_date` (required): Payment due date
    - `items` (required): At least one `{name, description?, quantity, price}`
    - `tax`, `discount` (optional): Non-negative amounts, discount <= subtotal
    - `notes` (optional): Free-text notes

    **Returns:**
    - 201: Invoice created
    - 400: Validation error
    - 403: Caller is not a seller
    - 404: Buyer not found or KYC incomplete
    - 409: Invoice number conflict
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=invoice_repo,
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        actor_directory=SqlAlchemyActorDirectory(session),
        number_allocator=SqlAlchemyInvoiceNumberAllocator(session, invoice_repo),
        max_number_attempts=ApplicationConfig.INVOICE_NUMBER_MAX_ATTEMPTS,
    )

    command = CreateInvoiceCommandDTO(seller_id=actor.actor_id, **request.model_dump())
    return _unwrap(await use_case.execute(command))


@router.get(
    "/seller",
    response_model=ListInvoicesResponseDTO,
    responses={403: FORBIDDEN_RESPONSE},
)
async def list_seller_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """List invoices issued by the calling seller, newest first."""
    _require_role(actor, ActorRole.SELLER)
    use_case = ListInvoices(SqlAlchemyInvoiceRepository(session))
    return _unwrap(
        await use_case.execute(
            actor.actor_id, ActorRole.SELLER, status=status_filter, limit=limit, offset=offset
        )
    )


@router.get(
    "/buyer",
    response_model=ListInvoicesResponseDTO,
    responses={403: FORBIDDEN_RESPONSE},
)
async def list_buyer_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """List invoices addressed to the calling buyer, newest first."""
    _require_role(actor, ActorRole.BUYER)
    use_case = ListInvoices(SqlAlchemyInvoiceRepository(session))
    return _unwrap(
        await use_case.execute(
            actor.actor_id, ActorRole.BUYER, status=status_filter, limit=limit, offset=offset
        )
    )


@router.get(
    "/buyers",
    response_model=ListBuyersResponseDTO,
    responses={403: FORBIDDEN_RESPONSE},
)
async def list_eligible_buyers(
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """List KYC-verified buyers the calling seller can invoice."""
    use_case = ListEligibleBuyers(SqlAlchemyActorDirectory(session))
    return _unwrap(await use_case.execute(actor.actor_id))


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={403: FORBIDDEN_RESPONSE, 404: NOT_FOUND_RESPONSE},
)
async def get_invoice(
    invoice_id: int,
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """Get an invoice with its line items. Only its buyer or seller may view it."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    return _unwrap(await use_case.execute(invoice_id, actor.actor_id))


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={
        403: _error_example(
            "INVOICE_NOT_CORRECTABLE",
            "Can only update invoices that need correction",
            "Not the seller, or invoice not awaiting correction",
        ),
        404: NOT_FOUND_RESPONSE,
    },
)
async def resubmit_invoice(
    invoice_id: int,
    request: ResubmitInvoiceRequestSchema,
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Resubmit an invoice after the buyer requested a correction.

    Replaces the line items and adjustments, recomputes all totals, clears the
    correction notes and sets the status back to `sent`.

    **Returns:**
    - 200: Invoice resubmitted
    - 400: Validation error
    - 403: Caller is not the seller, or status is not `correction_requested`
    - 404: Invoice not found
    """
    use_case = UpdateInvoiceAfterCorrection(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
    )
    command = ResubmitInvoiceCommandDTO(
        invoice_id=invoice_id,
        actor_id=actor.actor_id,
        **request.model_dump(),
    )
    return _unwrap(await use_case.execute(command))


@router.put(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    responses={
        403: _error_example(
            "INVALID_TRANSITION",
            "Cannot change status from approved to correction_requested",
            "Transition not allowed for this actor",
        ),
        404: NOT_FOUND_RESPONSE,
    },
)
async def update_invoice_status(
    invoice_id: int,
    request: UpdateStatusRequestSchema,
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Change an invoice's status.

    Buyers may approve or request a correction (with notes) while the invoice
    is `sent`. Sellers may set `sent` or `paid` at any time.

    **Returns:**
    - 200: Status updated
    - 400: Unknown status or missing correction notes
    - 403: Caller is not the acting party, or transition not allowed
    - 404: Invoice not found
    """
    use_case = UpdateInvoiceStatus(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
    )
    command = UpdateStatusCommandDTO(
        invoice_id=invoice_id,
        actor_id=actor.actor_id,
        actor_role=actor.role,
        status=request.status,
        correction_notes=request.correction_notes,
    )
    return _unwrap(await use_case.execute(command))


@router.get(
    "/{invoice_id}/pdf",
    response_model=InvoicePdfResponseDTO,
    responses={403: FORBIDDEN_RESPONSE, 404: NOT_FOUND_RESPONSE},
)
async def get_invoice_pdf(
    invoice_id: int,
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """Render the invoice as a PDF, returned base64-encoded."""
    return _unwrap(await _pdf_use_case(session).execute(invoice_id, actor.actor_id))


@router.get(
    "/{invoice_id}/pdf/download",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        403: FORBIDDEN_RESPONSE,
        404: NOT_FOUND_RESPONSE,
    },
)
async def download_invoice_pdf(
    invoice_id: int,
    actor: ActorProfile = Depends(get_current_actor),
    session: AsyncSession = Depends(get_session),
):
    """Download the invoice as a PDF file."""
    pdf = _unwrap(await _pdf_use_case(session).execute(invoice_id, actor.actor_id))

    return Response(
        content=base64.b64decode(pdf.pdf_base64),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={pdf.filename}"},
    )
