"""Entity to DTO conversion for invoicing use cases"""

from typing import List
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from .dtos import InvoiceLineDTO, InvoiceResponseDTO, InvoiceSummaryDTO


def to_invoice_response(invoice: Invoice, lines: List[InvoiceLine]) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        seller_id=invoice.seller_id,
        buyer_id=invoice.buyer_id,
        status=invoice.status.value,
        items=[
            InvoiceLineDTO(
                id=line.id,
                name=line.name,
                description=line.description or "",
                quantity=line.quantity,
                price=line.price,
                total=line.total,
            )
            for line in sorted(lines, key=lambda line: line.position)
        ],
        subtotal=invoice.subtotal,
        tax=invoice.tax,
        discount=invoice.discount,
        total=invoice.total,
        notes=invoice.notes or "",
        correction_notes=invoice.correction_notes or "",
        due_date=invoice.due_date,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_invoice_summary(invoice: Invoice) -> InvoiceSummaryDTO:
    return InvoiceSummaryDTO(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        seller_id=invoice.seller_id,
        buyer_id=invoice.buyer_id,
        status=invoice.status.value,
        total=invoice.total,
        due_date=invoice.due_date,
        created_at=invoice.created_at,
    )
