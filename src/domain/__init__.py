from .base import BaseModel, generate_uuid
from .actor import Actor, ActorRole
from .invoice import Invoice, InvoiceStatus
from .invoice_line import InvoiceLine
from .invoice_sequence import InvoiceSequence, INVOICE_SEQUENCE_NAME

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Actor",
    "ActorRole",
    "Invoice",
    "InvoiceStatus",
    "InvoiceLine",
    "InvoiceSequence",
    "INVOICE_SEQUENCE_NAME",
]
