"""Integration tests for the invoice lifecycle against a real database

Tests cover:
- Creation with sequential numbers and persisted lines
- Rejected creation persists nothing
- Stored line values keep line totals consistent
- Correction round trip (request, resubmit)
- Rejected status changes leave stored state unchanged
- Listing by role
"""

import pytest
from datetime import date
from decimal import Decimal

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.actor_directory import SqlAlchemyActorDirectory
from src.adapter.services.invoice_number_allocator import SqlAlchemyInvoiceNumberAllocator
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import (
    CreateInvoice,
    CreateInvoiceCommandDTO,
    LineItemInputDTO,
    ListInvoices,
    ResubmitInvoiceCommandDTO,
    UpdateInvoiceAfterCorrection,
    UpdateInvoiceStatus,
    UpdateStatusCommandDTO,
)
from src.domain.actor import ActorRole
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.invoice_pricing import round2


def create_use_case(session: AsyncSession) -> CreateInvoice:
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    return CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=invoice_repo,
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
        actor_directory=SqlAlchemyActorDirectory(session),
        number_allocator=SqlAlchemyInvoiceNumberAllocator(session, invoice_repo),
    )


def status_use_case(session: AsyncSession) -> UpdateInvoiceStatus:
    return UpdateInvoiceStatus(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_line_repo=SqlAlchemyInvoiceLineRepository(session),
    )


def widget_command(**overrides) -> CreateInvoiceCommandDTO:
    values = dict(
        seller_id="seller-1",
        buyer_id="buyer-1",
        due_date=date(2024, 2, 29),
        items=[LineItemInputDTO(name="Widget", quantity=Decimal("2"), price=Decimal("9.995"))],
        tax=Decimal("1.00"),
        discount=Decimal("0.50"),
    )
    values.update(overrides)
    return CreateInvoiceCommandDTO(**values)


async def count_invoices(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(Invoice))
    return result.scalar_one()


@pytest.mark.asyncio
class TestInvoiceCreationIntegration:
    """Creation with real repositories and allocator"""

    async def test_end_to_end_invoice_creation(self, db_session, actors):
        # Act
        result = await create_use_case(db_session).execute(widget_command())

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.invoice_number == "INV-000001"
        assert response.status == "sent"
        assert response.subtotal == Decimal("19.99")
        assert response.total == Decimal("20.49")

        invoice = await SqlAlchemyInvoiceRepository(db_session).get_by_id(response.invoice_id)
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.total == Decimal("20.49")

        lines = await SqlAlchemyInvoiceLineRepository(db_session).get_by_invoice_id(invoice.id)
        assert len(lines) == 1
        assert lines[0].total == Decimal("19.99")
        assert lines[0].position == 0

    async def test_numbers_are_sequential(self, db_session, actors):
        use_case = create_use_case(db_session)

        numbers = []
        for _ in range(3):
            result = await use_case.execute(widget_command())
            numbers.append(result.value.invoice_number)

        assert numbers == ["INV-000001", "INV-000002", "INV-000003"]

    async def test_discount_above_subtotal_persists_nothing(self, db_session, actors):
        items = [LineItemInputDTO(name="A", quantity=Decimal("2"), price=Decimal("10.00"))]

        result = await create_use_case(db_session).execute(
            widget_command(items=items, tax=Decimal("0"), discount=Decimal("25.00"))
        )

        assert result.error.code == "DISCOUNT_EXCEEDS_SUBTOTAL"
        assert await count_invoices(db_session) == 0

        follow_up = await create_use_case(db_session).execute(widget_command())
        assert follow_up.value.invoice_number == "INV-000001"

    async def test_stored_line_total_matches_stored_quantity_and_price(
        self, db_session, session_factory, actors
    ):
        """
        Given: A quantity with more decimal places than the line column keeps
        When: The invoice is created and read back in a new session
        Then: The stored total equals round2(stored quantity x stored price)
        """
        items = [LineItemInputDTO(name="Bulk", quantity=Decimal("1.0000049"), price=Decimal("1000000"))]

        result = await create_use_case(db_session).execute(
            widget_command(items=items, tax=Decimal("0"), discount=Decimal("0"))
        )

        assert result.is_ok()
        async with session_factory() as fresh:
            invoice = await SqlAlchemyInvoiceRepository(fresh).get_by_id(result.value.invoice_id)
            lines = await SqlAlchemyInvoiceLineRepository(fresh).get_by_invoice_id(invoice.id)

        assert lines[0].quantity == Decimal("1.000005")
        assert lines[0].total == round2(lines[0].quantity * lines[0].price)
        assert invoice.subtotal == lines[0].total == Decimal("1000005.00")

    async def test_quantity_below_stored_scale_persists_nothing(self, db_session, actors):
        items = [LineItemInputDTO(name="Dust", quantity=Decimal("0.0000001"), price=Decimal("5"))]

        result = await create_use_case(db_session).execute(widget_command(items=items))

        assert result.error.code == "VALIDATION_ERROR"
        assert await count_invoices(db_session) == 0

    async def test_oversized_amounts_are_validation_errors(self, db_session, actors):
        items = [LineItemInputDTO(name="Fleet", quantity=Decimal("1E11"), price=Decimal("1E11"))]

        result = await create_use_case(db_session).execute(
            widget_command(items=items, tax=Decimal("0"), discount=Decimal("0"))
        )

        assert result.error.code == "VALIDATION_ERROR"
        assert await count_invoices(db_session) == 0

    async def test_unverified_buyer_rejected(self, db_session, actors):
        result = await create_use_case(db_session).execute(widget_command(buyer_id="buyer-2"))

        assert result.error.code == "BUYER_KYC_INCOMPLETE"
        assert await count_invoices(db_session) == 0


@pytest.mark.asyncio
class TestInvoiceStatusIntegration:
    """Status changes and correction round trip"""

    async def test_correction_round_trip(self, db_session, session_factory, actors):
        """
        Given: A sent invoice
        When: The buyer requests a correction, then the seller resubmits
        Then: The invoice is sent again with new totals and no correction notes
        """
        created = (await create_use_case(db_session).execute(widget_command())).value

        requested = await status_use_case(db_session).execute(
            UpdateStatusCommandDTO(
                invoice_id=created.invoice_id,
                actor_id="buyer-1",
                actor_role=ActorRole.BUYER,
                status="correction_requested",
                correction_notes="wrong price",
            )
        )
        assert requested.value.status == "correction_requested"
        assert requested.value.correction_notes == "wrong price"

        resubmitted = await UpdateInvoiceAfterCorrection(
            uow=SqlAlchemyUnitOfWork(db_session),
            invoice_repo=SqlAlchemyInvoiceRepository(db_session),
            invoice_line_repo=SqlAlchemyInvoiceLineRepository(db_session),
        ).execute(
            ResubmitInvoiceCommandDTO(
                invoice_id=created.invoice_id,
                actor_id="seller-1",
                items=[
                    LineItemInputDTO(name="Widget", quantity=Decimal("2"), price=Decimal("9.00")),
                    LineItemInputDTO(name="Shipping", quantity=Decimal("1"), price=Decimal("4.50")),
                ],
                tax=Decimal("1.00"),
            )
        )

        assert resubmitted.is_ok()
        assert resubmitted.value.status == "sent"
        assert resubmitted.value.correction_notes == ""
        assert resubmitted.value.invoice_number == created.invoice_number
        assert resubmitted.value.subtotal == Decimal("22.50")
        assert resubmitted.value.total == Decimal("23.50")

        async with session_factory() as fresh:
            stored = await SqlAlchemyInvoiceRepository(fresh).get_by_id(created.invoice_id)
            assert stored.status == InvoiceStatus.SENT
            assert stored.correction_notes == ""
            lines = (
                await fresh.execute(
                    select(InvoiceLine).where(InvoiceLine.invoice_id == created.invoice_id)
                )
            ).scalars().all()
            assert sorted(line.name for line in lines) == ["Shipping", "Widget"]

    async def test_rejected_change_leaves_stored_state(self, db_session, session_factory, actors):
        created = (await create_use_case(db_session).execute(widget_command())).value

        result = await status_use_case(db_session).execute(
            UpdateStatusCommandDTO(
                invoice_id=created.invoice_id,
                actor_id="buyer-2",
                actor_role=ActorRole.BUYER,
                status="approved",
            )
        )

        assert result.error.code == "NOT_AUTHORIZED"
        async with session_factory() as fresh:
            stored = await SqlAlchemyInvoiceRepository(fresh).get_by_id(created.invoice_id)
            assert stored.status == InvoiceStatus.SENT

    async def test_buyer_cannot_approve_after_paid(self, db_session, actors):
        created = (await create_use_case(db_session).execute(widget_command())).value
        use_case = status_use_case(db_session)

        paid = await use_case.execute(
            UpdateStatusCommandDTO(
                invoice_id=created.invoice_id,
                actor_id="seller-1",
                actor_role=ActorRole.SELLER,
                status="paid",
            )
        )
        approve = await use_case.execute(
            UpdateStatusCommandDTO(
                invoice_id=created.invoice_id,
                actor_id="buyer-1",
                actor_role=ActorRole.BUYER,
                status="approved",
            )
        )

        assert paid.value.status == "paid"
        assert approve.error.code == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_listing_by_role(db_session, actors):
    use_case = create_use_case(db_session)
    for _ in range(2):
        await use_case.execute(widget_command())

    listing = ListInvoices(SqlAlchemyInvoiceRepository(db_session))
    seller_view = await listing.execute("seller-1", ActorRole.SELLER)
    buyer_view = await listing.execute("buyer-1", ActorRole.BUYER, status=InvoiceStatus.SENT)
    stranger_view = await listing.execute("buyer-2", ActorRole.BUYER)

    assert [i.invoice_number for i in seller_view.value.invoices] == ["INV-000002", "INV-000001"]
    assert len(buyer_view.value.invoices) == 2
    assert stranger_view.value.invoices == []
