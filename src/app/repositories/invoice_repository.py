"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for the invoice lifecycle use cases.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist (invoice_number already allocated)

        Returns:
            Created Invoice with generated ID

        Raises:
            InvoiceNumberConflict: invoice_number is already used by another invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row until the transaction ends

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_most_recent(self) -> Optional[Invoice]:
        """
        Retrieve the most recently created invoice

        Returns:
            Invoice with the latest created_at, None if there are no invoices
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Save changes to an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def list_by_seller(
        self,
        seller_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve invoices issued by a seller, newest first

        Args:
            seller_id: Seller actor ID
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def list_by_buyer(
        self,
        buyer_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve invoices addressed to a buyer, newest first

        Args:
            buyer_id: Buyer actor ID
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass
