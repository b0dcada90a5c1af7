"""UpdateInvoiceStatus Use Case

Applies a buyer's or seller's status change according to the workflow table.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.actor import ActorRole
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_workflow import (
    TransitionEffect,
    TransitionKind,
    find_transition,
    requestable_statuses,
)
from .dtos import UpdateStatusCommandDTO, InvoiceResponseDTO
from .errors import (
    INVALID_STATUS_FOR_ROLE,
    INVALID_TRANSITION,
    invoice_not_found,
    not_authorized,
    validation_error,
)
from .mappers import to_invoice_response

logger = logging.getLogger(__name__)


def is_acting_party(invoice: Invoice, actor_id: str, role: ActorRole) -> bool:
    """The actor is the invoice's buyer (acting as buyer) or seller (acting as seller)"""
    if role == ActorRole.BUYER:
        return invoice.buyer_id == actor_id
    if role == ActorRole.SELLER:
        return invoice.seller_id == actor_id
    return False


class UpdateInvoiceStatus:
    """
    Use Case: Change invoice status

    Business Rules:
    1. Actor must be the invoice's buyer or seller in the role they act in
    2. Buyers may approve or request correction, only while status=sent
    3. Sellers may set sent or paid from any status
    4. A correction request needs non-empty notes, which are stored
    5. Rejected requests leave the invoice untouched

    Flow:
    1. Load invoice (locked)
    2. Check party
    3. Parse requested status and look up the transition rule
    4. Apply rule effect and status, commit
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

    async def execute(self, command: UpdateStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute status change

        Args:
            command: UpdateStatusCommandDTO with invoice, actor, role, status

        Returns:
            Result[InvoiceResponseDTO]: Success with the updated invoice or error
        """
        try:
            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                return Return.err(invoice_not_found(command.invoice_id))

            # Step 2: Check party
            if not is_acting_party(invoice, command.actor_id, command.actor_role):
                return Return.err(not_authorized("Not authorized to update this invoice"))

            # Step 3: Resolve transition
            try:
                requested = InvoiceStatus(command.status)
            except ValueError:
                return Return.err(
                    validation_error(
                        f"Unknown invoice status '{command.status}'",
                        reason=f"expected one of {[s.value for s in InvoiceStatus]}",
                    )
                )

            if requested not in requestable_statuses(command.actor_role):
                return Return.err(
                    Error(
                        code=INVALID_STATUS_FOR_ROLE,
                        message=f"Invalid status update for {command.actor_role.value}",
                        reason=f"{command.actor_role.value} cannot set status {requested.value}",
                    )
                )

            rule = find_transition(
                TransitionKind.STATUS_CHANGE,
                command.actor_role,
                invoice.status,
                requested,
            )
            if rule is None:
                return Return.err(
                    Error(
                        code=INVALID_TRANSITION,
                        message=f"Cannot change status from {invoice.status.value} to {requested.value}",
                        reason=f"no {command.actor_role.value} transition from {invoice.status.value}",
                    )
                )

            # Step 4: Apply
            if rule.effect == TransitionEffect.STORE_CORRECTION_NOTES:
                correction_notes = (command.correction_notes or "").strip()
                if not correction_notes:
                    return Return.err(validation_error("Correction notes are required"))
                invoice.correction_notes = correction_notes

            previous_status = invoice.status
            invoice.status = rule.to_status

            updated_invoice = await self.invoice_repo.update(invoice)
            lines = await self.invoice_line_repo.get_by_invoice_id(updated_invoice.id)

            await self.uow.commit()

            logger.info(
                f"Invoice {updated_invoice.invoice_number} status {previous_status.value} -> "
                f"{updated_invoice.status.value} by {command.actor_role.value} {command.actor_id}"
            )

            return Return.ok(to_invoice_response(updated_invoice, lines))

        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Status update of invoice {command.invoice_id} failed")
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_STATUS_FAILED",
                    message="Failed to update invoice status",
                    reason=str(e),
                )
            )
