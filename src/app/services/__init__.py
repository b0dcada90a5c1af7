from .unit_of_work import UnitOfWork
from .actor_directory import ActorDirectory, ActorProfile
from .invoice_number_allocator import InvoiceNumberAllocator
from .pdf_service import PdfService

__all__ = [
    "UnitOfWork",
    "ActorDirectory",
    "ActorProfile",
    "InvoiceNumberAllocator",
    "PdfService",
]
