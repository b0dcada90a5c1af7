"""Integration tests for SqlAlchemyInvoiceNumberAllocator

Tests cover:
- Sequential allocation from the counter row
- Lazy seeding from existing invoices
- Rollback returns the number
- Unique constraint surfaces as InvoiceNumberConflict
- Concurrent creations through separate sessions
"""

import asyncio
import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.actor_directory import SqlAlchemyActorDirectory
from src.adapter.services.invoice_number_allocator import SqlAlchemyInvoiceNumberAllocator
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import CreateInvoice, CreateInvoiceCommandDTO, LineItemInputDTO
from src.domain.invoice import Invoice
from src.domain.invoice_number import InvoiceNumberConflict
from src.domain.invoice_sequence import InvoiceSequence, INVOICE_SEQUENCE_NAME


def stored_invoice(invoice_number: str, created_at: datetime) -> Invoice:
    return Invoice(
        invoice_number=invoice_number,
        seller_id="seller-1",
        buyer_id="buyer-1",
        subtotal=Decimal("10.00"),
        tax=Decimal("0.00"),
        discount=Decimal("0.00"),
        total=Decimal("10.00"),
        due_date=date(2024, 3, 1),
        created_at=created_at,
        updated_at=created_at,
    )


def allocator_for(session) -> SqlAlchemyInvoiceNumberAllocator:
    return SqlAlchemyInvoiceNumberAllocator(session, SqlAlchemyInvoiceRepository(session))


@pytest.mark.asyncio
class TestAllocation:
    """Counter-backed allocation"""

    async def test_first_allocation_on_empty_store(self, db_session):
        number = await allocator_for(db_session).allocate()
        await db_session.commit()

        assert number == "INV-000001"
        sequence = await db_session.get(InvoiceSequence, INVOICE_SEQUENCE_NAME)
        assert sequence.last_value == 1

    async def test_allocations_are_strictly_increasing(self, db_session):
        allocator = allocator_for(db_session)

        numbers = []
        for _ in range(5):
            numbers.append(await allocator.allocate())
            await db_session.commit()

        assert numbers == [f"INV-00000{n}" for n in range(1, 6)]

    async def test_counter_survives_new_sessions(self, db_session, session_factory):
        await allocator_for(db_session).allocate()
        await db_session.commit()

        async with session_factory() as other:
            number = await allocator_for(other).allocate()
            await other.commit()

        assert number == "INV-000002"

    async def test_rollback_returns_number(self, db_session):
        allocator = allocator_for(db_session)
        await allocator.allocate()
        await db_session.commit()

        abandoned = await allocator.allocate()
        await db_session.rollback()
        reissued = await allocator.allocate()

        assert abandoned == reissued == "INV-000002"


@pytest.mark.asyncio
class TestSeeding:
    """Seeding the counter from invoices created before it existed"""

    async def test_continues_after_most_recent_invoice(self, db_session):
        now = datetime.utcnow()
        db_session.add(stored_invoice("INV-000040", now - timedelta(days=2)))
        db_session.add(stored_invoice("INV-000041", now - timedelta(days=1)))
        await db_session.commit()

        number = await allocator_for(db_session).allocate()

        assert number == "INV-000042"

    async def test_malformed_recent_number_starts_from_one(self, db_session):
        db_session.add(stored_invoice("LEGACY-7", datetime.utcnow()))
        await db_session.commit()

        number = await allocator_for(db_session).allocate()

        assert number == "INV-000001"


@pytest.mark.asyncio
async def test_duplicate_number_raises_conflict(db_session):
    repo = SqlAlchemyInvoiceRepository(db_session)
    await repo.create(stored_invoice("INV-000001", datetime.utcnow()))
    await db_session.commit()

    with pytest.raises(InvoiceNumberConflict) as exc_info:
        await repo.create(stored_invoice("INV-000001", datetime.utcnow()))

    assert exc_info.value.invoice_number == "INV-000001"
    await db_session.rollback()


def create_use_case(session) -> CreateInvoice:
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    return CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=invoice_repo,
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        actor_directory=SqlAlchemyActorDirectory(session),
        number_allocator=SqlAlchemyInvoiceNumberAllocator(session, invoice_repo),
    )


@pytest.mark.asyncio
async def test_concurrent_creations_get_distinct_numbers(session_factory, actors):
    """
    Given: An empty store and no counter row
    When: Two sessions create invoices at the same time
    Then: Both succeed with INV-000001 and INV-000002
    """
    command = CreateInvoiceCommandDTO(
        seller_id="seller-1",
        buyer_id="buyer-1",
        due_date=date(2024, 2, 29),
        items=[LineItemInputDTO(name="Widget", quantity=Decimal("1"), price=Decimal("10"))],
    )

    async with session_factory() as first, session_factory() as second:
        results = await asyncio.gather(
            create_use_case(first).execute(command),
            create_use_case(second).execute(command),
        )

    assert all(result.is_ok() for result in results)
    assert {result.value.invoice_number for result in results} == {"INV-000001", "INV-000002"}

    async with session_factory() as fresh:
        sequence = await fresh.get(InvoiceSequence, INVOICE_SEQUENCE_NAME)
        assert sequence.last_value == 2
