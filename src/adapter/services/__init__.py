from .unit_of_work import SqlAlchemyUnitOfWork
from .actor_directory import SqlAlchemyActorDirectory
from .invoice_number_allocator import SqlAlchemyInvoiceNumberAllocator
from .pdf_service import ReportLabPdfService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyActorDirectory",
    "SqlAlchemyInvoiceNumberAllocator",
    "ReportLabPdfService",
]
