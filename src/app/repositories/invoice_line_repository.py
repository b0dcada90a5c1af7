"""Invoice Line Repository Interface

Defines the contract for invoice line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence
from src.domain.invoice_line import InvoiceLine
from src.domain.invoice_pricing import PricedLine


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLine persistence

    Lines are always written as a complete, ordered set for one invoice.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice in entry order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine items ordered by position
        """
        pass

    @abstractmethod
    async def create_many(self, invoice_id: int, lines: Sequence[PricedLine]) -> List[InvoiceLine]:
        """
        Persist priced lines for a new invoice

        Args:
            invoice_id: Invoice ID
            lines: Priced lines in entry order

        Returns:
            Created InvoiceLine items
        """
        pass

    @abstractmethod
    async def replace_for_invoice(self, invoice_id: int, lines: Sequence[PricedLine]) -> List[InvoiceLine]:
        """
        Replace every line of an invoice

        Args:
            invoice_id: Invoice ID
            lines: New priced lines in entry order

        Returns:
            Created InvoiceLine items
        """
        pass
