"""SQLAlchemy Invoice Number Allocator Implementation

Allocates invoice numbers from the invoice_sequences counter row.
"""

import logging
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.invoice_number_allocator import InvoiceNumberAllocator
from src.domain.invoice_number import (
    InvoiceNumberConflict,
    format_invoice_number,
    parse_invoice_number,
)
from src.domain.invoice_sequence import InvoiceSequence, INVOICE_SEQUENCE_NAME

logger = logging.getLogger(__name__)


class SqlAlchemyInvoiceNumberAllocator(InvoiceNumberAllocator):
    """
    Counter-backed invoice number allocation

    Features:
    - Single UPDATE ... SET last_value = last_value + 1; the row lock it takes
      serializes concurrent allocations until the creating transaction ends
    - Counter row is seeded lazily from the most recent invoice
    - Runs in the caller's transaction, so a rollback returns the number
    """

    def __init__(
        self,
        session: AsyncSession,
        invoice_repo: InvoiceRepository,
        sequence_name: str = INVOICE_SEQUENCE_NAME,
    ):
        self.session = session
        self.invoice_repo = invoice_repo
        self.sequence_name = sequence_name

    async def allocate(self) -> str:
        """
        Reserve the next invoice number

        Returns:
            Formatted invoice number (e.g., INV-000001)

        Raises:
            InvoiceNumberConflict: another transaction seeded the counter first
        """
        result = await self.session.execute(
            update(InvoiceSequence)
            .where(InvoiceSequence.name == self.sequence_name)
            .values(last_value=InvoiceSequence.last_value + 1)
        )

        if result.rowcount == 0:
            value = await self._seed()
        else:
            value = (
                await self.session.execute(
                    select(InvoiceSequence.last_value).where(
                        InvoiceSequence.name == self.sequence_name
                    )
                )
            ).scalar_one()

        return format_invoice_number(value)

    async def _seed(self) -> int:
        """Create the counter row, continuing after the most recent invoice"""
        start = 0
        most_recent = await self.invoice_repo.get_most_recent()
        if most_recent:
            try:
                start = parse_invoice_number(most_recent.invoice_number)
            except ValueError:
                logger.warning(
                    f"Ignoring malformed invoice number {most_recent.invoice_number!r} "
                    f"while seeding sequence '{self.sequence_name}'"
                )

        sequence = InvoiceSequence(name=self.sequence_name, last_value=start + 1)
        self.session.add(sequence)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise InvoiceNumberConflict(format_invoice_number(start + 1)) from e

        logger.info(f"Seeded invoice sequence '{self.sequence_name}' at {start + 1}")
        return sequence.last_value
