"""GenerateInvoicePdf Use Case

Renders an invoice as a PDF document for either party.
"""

import base64
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.services.actor_directory import ActorDirectory
from src.app.services.pdf_service import PdfService
from .dtos import InvoicePdfResponseDTO
from .errors import invoice_not_found, not_authorized
from .get_invoice import is_party


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must exist
    2. Only the invoice's buyer or seller may export it
    3. Returns PDF as base64-encoded string

    Flow:
    1. Retrieve invoice and check party
    2. Retrieve line items and party profiles
    3. Generate PDF using PDF service
    4. Return response with PDF as base64
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        actor_directory: ActorDirectory,
        pdf_service: PdfService,
        currency: str = "GBP",
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.actor_directory = actor_directory
        self.pdf_service = pdf_service
        self.currency = currency

    async def execute(self, invoice_id: int, actor_id: str) -> Result[InvoicePdfResponseDTO]:
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            if not is_party(invoice, actor_id):
                return Return.err(not_authorized("Not authorized to view this invoice"))

            # Step 2: Retrieve line items and parties
            invoice_lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
            seller = await self.actor_directory.lookup_actor(invoice.seller_id)
            buyer = await self.actor_directory.lookup_actor(invoice.buyer_id)

            # Step 3: Generate PDF
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                invoice_lines=invoice_lines,
                seller=seller,
                buyer=buyer,
                currency=self.currency,
            )

            # Step 4: Build response
            return Return.ok(
                InvoicePdfResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    filename=f"invoice-{invoice.invoice_number}.pdf",
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=datetime.utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
