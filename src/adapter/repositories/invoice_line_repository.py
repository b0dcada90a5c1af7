"""SQLAlchemy Invoice Line Repository Implementation

Implements invoice line persistence using SQLAlchemy async session.
"""

from typing import List, Sequence
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLine
from src.domain.invoice_pricing import PricedLine


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):
    """
    SQLAlchemy implementation of InvoiceLineRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice in entry order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine items
        """
        statement = (
            select(InvoiceLine)
            .where(InvoiceLine.invoice_id == invoice_id)
            .order_by(InvoiceLine.position)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_many(self, invoice_id: int, lines: Sequence[PricedLine]) -> List[InvoiceLine]:
        """
        Persist priced lines for an invoice

        Args:
            invoice_id: Invoice ID
            lines: Priced lines in entry order

        Returns:
            Created InvoiceLine items with generated IDs
        """
        invoice_lines = [
            InvoiceLine(
                invoice_id=invoice_id,
                position=position,
                name=line.name,
                description=line.description,
                quantity=line.quantity,
                price=line.price,
                total=line.total,
            )
            for position, line in enumerate(lines)
        ]
        self.session.add_all(invoice_lines)
        await self.session.flush()
        for invoice_line in invoice_lines:
            await self.session.refresh(invoice_line)
        return invoice_lines

    async def replace_for_invoice(self, invoice_id: int, lines: Sequence[PricedLine]) -> List[InvoiceLine]:
        """
        Delete the current lines of an invoice and persist new ones

        Args:
            invoice_id: Invoice ID
            lines: New priced lines in entry order

        Returns:
            Created InvoiceLine items
        """
        await self.session.execute(
            delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice_id)
        )
        return await self.create_many(invoice_id, lines)
