from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository

__all__ = [
    "InvoiceRepository",
    "InvoiceLineRepository",
]
