"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.app.services.actor_directory import ActorProfile
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF generation capabilities for invoices.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        seller: Optional[ActorProfile],
        buyer: Optional[ActorProfile],
        currency: str = "GBP",
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice entity with totals and dates
            invoice_lines: Line items in entry order
            seller: Issuing seller profile (None if no longer in the directory)
            buyer: Billed buyer profile (None if no longer in the directory)
            currency: Currency label printed next to amounts

        Returns:
            PDF document as bytes
        """
        pass
