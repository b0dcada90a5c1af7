"""GetInvoice Use Case

Read-only retrieval of a single invoice by one of its parties.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice import Invoice
from .dtos import InvoiceResponseDTO
from .errors import invoice_not_found, not_authorized
from .mappers import to_invoice_response


def is_party(invoice: Invoice, actor_id: str) -> bool:
    return actor_id in (invoice.buyer_id, invoice.seller_id)


class GetInvoice:
    """
    Use Case: Get invoice with line items

    Business Rules:
    1. Invoice must exist
    2. Only the invoice's buyer or seller may view it
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, invoice_id: int, actor_id: str) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            if not is_party(invoice, actor_id):
                return Return.err(not_authorized("Not authorized to view this invoice"))

            lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
            return Return.ok(to_invoice_response(invoice, lines))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to retrieve invoice",
                    reason=str(e),
                )
            )
