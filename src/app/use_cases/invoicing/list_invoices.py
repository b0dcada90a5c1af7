"""ListInvoices Use Case

Lists the invoices a seller issued or a buyer received.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.actor import ActorRole
from src.domain.invoice import InvoiceStatus
from .dtos import ListInvoicesResponseDTO
from .mappers import to_invoice_summary

MAX_PAGE_SIZE = 100


class ListInvoices:
    """
    Use Case: List an actor's invoices

    Business Rules:
    1. Sellers see invoices they issued, buyers see invoices addressed to them
    2. Newest first, optional status filter
    3. limit is clamped to 1..MAX_PAGE_SIZE, offset to >= 0
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        actor_id: str,
        actor_role: ActorRole,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListInvoicesResponseDTO]:
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        offset = max(offset, 0)

        try:
            if actor_role == ActorRole.SELLER:
                invoices = await self.invoice_repo.list_by_seller(
                    actor_id, status=status, limit=limit, offset=offset
                )
            else:
                invoices = await self.invoice_repo.list_by_buyer(
                    actor_id, status=status, limit=limit, offset=offset
                )

            return Return.ok(
                ListInvoicesResponseDTO(
                    invoices=[to_invoice_summary(invoice) for invoice in invoices],
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_INVOICES_FAILED",
                    message="Failed to list invoices",
                    reason=str(e),
                )
            )
