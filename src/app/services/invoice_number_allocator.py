"""Invoice Number Allocator Interface

Hands out display numbers (INV-000001, INV-000002, ...) for new invoices.
"""

from abc import ABC, abstractmethod


class InvoiceNumberAllocator(ABC):
    @abstractmethod
    async def allocate(self) -> str:
        """
        Reserve the next invoice number

        Runs inside the caller's transaction: rolling the transaction back
        releases the reservation.

        Returns:
            Formatted invoice number

        Raises:
            InvoiceNumberConflict: a concurrent allocation won the race; retry
        """
        pass
