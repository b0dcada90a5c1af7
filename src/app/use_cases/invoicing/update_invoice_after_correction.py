"""UpdateInvoiceAfterCorrection Use Case

Lets a seller revise an invoice the buyer sent back and resend it.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.actor import ActorRole
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_pricing import price_invoice
from src.domain.invoice_workflow import TransitionKind, find_transition
from .dtos import ResubmitInvoiceCommandDTO, InvoiceResponseDTO
from .errors import INVOICE_NOT_CORRECTABLE, invoice_not_found, not_authorized
from .mappers import to_invoice_response
from .validation import check_totals, validate_adjustments, validate_line_items

logger = logging.getLogger(__name__)


class UpdateInvoiceAfterCorrection:
    """
    Use Case: Resubmit a corrected invoice

    Business Rules:
    1. Only the invoice's seller may resubmit
    2. Only invoices in correction_requested can be resubmitted
    3. Items, tax and discount are validated and priced exactly as on creation
    4. Status returns to sent and the correction notes are cleared
    5. Buyer KYC is not re-checked

    Flow:
    1. Load invoice (locked)
    2. Check seller and status
    3. Validate and price new items
    4. Replace lines, update invoice, commit
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, command: ResubmitInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice resubmission

        Args:
            command: ResubmitInvoiceCommandDTO with invoice, actor and new items

        Returns:
            Result[InvoiceResponseDTO]: Success with the updated invoice or error
        """
        try:
            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                return Return.err(invoice_not_found(command.invoice_id))

            # Step 2: Check seller and status
            if invoice.seller_id != command.actor_id:
                return Return.err(not_authorized("Not authorized to update this invoice"))

            rule = find_transition(
                TransitionKind.RESUBMISSION,
                ActorRole.SELLER,
                invoice.status,
                InvoiceStatus.SENT,
            )
            if rule is None:
                return Return.err(
                    Error(
                        code=INVOICE_NOT_CORRECTABLE,
                        message="Can only update invoices that need correction",
                        reason=f"status={invoice.status.value}",
                    )
                )

            # Step 3: Validate and price
            items_result = validate_line_items(command.items)
            if items_result.is_err():
                return items_result

            adjustment_error = validate_adjustments(command.tax, command.discount)
            if adjustment_error:
                return Return.err(adjustment_error)

            totals = price_invoice(items_result.value, command.tax, command.discount)
            totals_error = check_totals(totals)
            if totals_error:
                return Return.err(totals_error)

            # Step 4: Apply and persist
            lines = await self.invoice_line_repo.replace_for_invoice(invoice.id, totals.lines)

            invoice.subtotal = totals.subtotal
            invoice.tax = totals.tax
            invoice.discount = totals.discount
            invoice.total = totals.total
            invoice.notes = (command.notes or "").strip()
            invoice.status = rule.to_status
            invoice.correction_notes = ""

            updated_invoice = await self.invoice_repo.update(invoice)

            await self.uow.commit()

            logger.info(
                f"Invoice {updated_invoice.invoice_number} resubmitted by seller {command.actor_id}, "
                f"total={updated_invoice.total}"
            )

            return Return.ok(to_invoice_response(updated_invoice, lines))

        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Resubmission of invoice {command.invoice_id} failed")
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
