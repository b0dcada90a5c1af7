"""CreateInvoice Use Case

Issues a new invoice from a seller to a KYC-verified buyer.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.actor_directory import ActorDirectory
from src.app.services.invoice_number_allocator import InvoiceNumberAllocator
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.actor import ActorRole
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_number import InvoiceNumberConflict
from src.domain.invoice_pricing import InvoiceTotals, price_invoice
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .errors import (
    BUYER_KYC_INCOMPLETE,
    BUYER_NOT_FOUND,
    INVOICE_NUMBER_CONFLICT,
    not_authorized,
    validation_error,
)
from .mappers import to_invoice_response
from .validation import check_totals, validate_adjustments, validate_line_items

logger = logging.getLogger(__name__)

DEFAULT_MAX_NUMBER_ATTEMPTS = 3


class CreateInvoice:
    """
    Use Case: Issue an invoice to a buyer

    Business Rules:
    1. Caller must be a seller
    2. Buyer, due date and at least one item are required; buyer != seller
    3. Items need a name, quantity > 0 and price >= 0; tax and discount >= 0
    4. Buyer must exist and have completed KYC
    5. Discount may not exceed the subtotal
    6. Invoice starts in status=sent with a freshly allocated number

    Flow:
    1. Resolve seller
    2. Validate request (fail fast, in the order above)
    3. Price items and check discount
    4. Allocate number, persist invoice and lines, commit
       (retried on number conflict, at most max_number_attempts times)
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        actor_directory: ActorDirectory,
        number_allocator: InvoiceNumberAllocator,
        max_number_attempts: int = DEFAULT_MAX_NUMBER_ATTEMPTS,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.actor_directory = actor_directory
        self.number_allocator = number_allocator
        self.max_number_attempts = max(1, max_number_attempts)

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with seller, buyer, due date, items

        Returns:
            Result[InvoiceResponseDTO]: Success with the stored invoice or error
        """
        try:
            # Step 1: Resolve seller
            seller = await self.actor_directory.lookup_actor(command.seller_id)
            if not seller or seller.role != ActorRole.SELLER:
                return Return.err(
                    not_authorized(
                        "Only sellers can create invoices",
                        reason=f"actor {command.seller_id} is not a seller",
                    )
                )

            # Step 2: Validate request
            if not command.buyer_id:
                return Return.err(validation_error("Buyer is required"))
            if not command.due_date:
                return Return.err(validation_error("Due date is required"))
            if not command.items:
                return Return.err(validation_error("At least one item is required"))
            if command.buyer_id == command.seller_id:
                return Return.err(validation_error("Buyer and seller must be different actors"))

            items_result = validate_line_items(command.items)
            if items_result.is_err():
                return items_result

            adjustment_error = validate_adjustments(command.tax, command.discount)
            if adjustment_error:
                return Return.err(adjustment_error)

            buyer = await self.actor_directory.lookup_actor(command.buyer_id)
            if not buyer or buyer.role != ActorRole.BUYER:
                return Return.err(
                    Error(
                        code=BUYER_NOT_FOUND,
                        message=f"Buyer {command.buyer_id} not found",
                        reason="No buyer account with this ID",
                    )
                )
            if not buyer.kyc_completed:
                return Return.err(
                    Error(
                        code=BUYER_KYC_INCOMPLETE,
                        message="Buyer has not completed KYC verification",
                        reason=f"buyer {command.buyer_id} kyc_completed=False",
                    )
                )

            # Step 3: Price items
            totals = price_invoice(items_result.value, command.tax, command.discount)
            totals_error = check_totals(totals)
            if totals_error:
                return Return.err(totals_error)

            # Step 4: Allocate number and persist
            for attempt in range(1, self.max_number_attempts + 1):
                try:
                    response = await self._persist(command, totals)
                except InvoiceNumberConflict as e:
                    await self.uow.rollback()
                    logger.warning(
                        f"Invoice number conflict on attempt {attempt}/{self.max_number_attempts}: {e}"
                    )
                    continue

                logger.info(
                    f"Invoice {response.invoice_number} created by seller {command.seller_id} "
                    f"for buyer {command.buyer_id}, total={response.total}"
                )
                return Return.ok(response)

            return Return.err(
                Error(
                    code=INVOICE_NUMBER_CONFLICT,
                    message="Could not allocate a unique invoice number",
                    reason=f"gave up after {self.max_number_attempts} attempts",
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.exception("Invoice creation failed")
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

    async def _persist(self, command: CreateInvoiceCommandDTO, totals: InvoiceTotals) -> InvoiceResponseDTO:
        invoice_number = await self.number_allocator.allocate()

        invoice = Invoice(
            invoice_number=invoice_number,
            seller_id=command.seller_id,
            buyer_id=command.buyer_id,
            status=InvoiceStatus.SENT,
            subtotal=totals.subtotal,
            tax=totals.tax,
            discount=totals.discount,
            total=totals.total,
            notes=(command.notes or "").strip(),
            correction_notes="",
            due_date=command.due_date,
        )

        created_invoice = await self.invoice_repo.create(invoice)
        lines = await self.invoice_line_repo.create_many(created_invoice.id, totals.lines)

        await self.uow.commit()

        return to_invoice_response(created_invoice, lines)
