"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_number import InvoiceNumberConflict


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Unique invoice_number violations surface as InvoiceNumberConflict
    - Optional SELECT FOR UPDATE on reads that precede a status change
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID

        Raises:
            InvoiceNumberConflict: invoice_number already exists
        """
        self.session.add(invoice)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if "invoice_number" in str(e.orig):
                raise InvoiceNumberConflict(invoice.invoice_number) from e
            raise
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID with optional row-level locking

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_most_recent(self) -> Optional[Invoice]:
        """
        Retrieve the most recently created invoice

        Returns:
            Invoice with the latest created_at, None if the table is empty
        """
        statement = (
            select(Invoice)
            .order_by(Invoice.created_at.desc(), Invoice.id.desc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Save changes to an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

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
        statement = select(Invoice).where(Invoice.seller_id == seller_id)
        return await self._list(statement, status, limit, offset)

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
        statement = select(Invoice).where(Invoice.buyer_id == buyer_id)
        return await self._list(statement, status, limit, offset)

    async def _list(self, statement, status: Optional[InvoiceStatus], limit: int, offset: int) -> List[Invoice]:
        if status:
            statement = statement.where(Invoice.status == status)

        statement = statement.order_by(Invoice.created_at.desc(), Invoice.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())
