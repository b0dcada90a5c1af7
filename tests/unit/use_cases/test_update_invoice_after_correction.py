"""Unit tests for UpdateInvoiceAfterCorrection use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.invoicing.dtos import LineItemInputDTO, ResubmitInvoiceCommandDTO
from src.app.use_cases.invoicing.update_invoice_after_correction import UpdateInvoiceAfterCorrection
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from tests.fixtures.factories import BUYER_ID, SELLER_ID, make_invoice


async def echo(invoice):
    return invoice


async def build_lines(invoice_id, priced_lines):
    return [
        InvoiceLine(
            id=10 + position,
            invoice_id=invoice_id,
            position=position,
            name=line.name,
            description=line.description,
            quantity=line.quantity,
            price=line.price,
            total=line.total,
        )
        for position, line in enumerate(priced_lines)
    ]


@pytest.fixture
def resubmit_use_case(mock_uow, mock_invoice_repo, mock_invoice_line_repo):
    """UpdateInvoiceAfterCorrection use case instance with mocked dependencies"""
    mock_invoice_repo.update = AsyncMock(side_effect=echo)
    mock_invoice_line_repo.replace_for_invoice = AsyncMock(side_effect=build_lines)
    return UpdateInvoiceAfterCorrection(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        invoice_line_repo=mock_invoice_line_repo,
    )


def make_command(**overrides):
    values = dict(
        invoice_id=1,
        actor_id=SELLER_ID,
        items=[LineItemInputDTO(name="Widget", quantity=Decimal("2"), price=Decimal("9.50"))],
        tax=Decimal("1.00"),
        discount=Decimal("0"),
        notes="corrected price",
    )
    values.update(overrides)
    return ResubmitInvoiceCommandDTO(**values)


@pytest.mark.asyncio
class TestResubmitSuccess:
    """Test a seller resubmitting a corrected invoice"""

    async def test_resubmission_recomputes_and_resends(
        self, resubmit_use_case, mock_invoice_repo, mock_invoice_line_repo, mock_uow
    ):
        """
        Given: An invoice in correction_requested with notes "wrong price"
        When: The seller resubmits corrected items
        Then: Totals are recomputed, status is sent and notes are cleared
        """
        invoice = make_invoice(InvoiceStatus.CORRECTION_REQUESTED, correction_notes="wrong price")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await resubmit_use_case.execute(make_command())

        assert result.is_ok()
        response = result.value
        assert response.status == "sent"
        assert response.correction_notes == ""
        assert response.subtotal == Decimal("19.00")
        assert response.tax == Decimal("1.00")
        assert response.discount == Decimal("0.00")
        assert response.total == Decimal("20.00")
        assert response.notes == "corrected price"
        assert response.invoice_number == "INV-000001"
        assert [item.id for item in response.items] == [10]

        mock_invoice_line_repo.replace_for_invoice.assert_called_once()
        mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
class TestResubmitRejected:
    """Test rejected resubmissions leave the invoice untouched"""

    async def test_invoice_not_found(self, resubmit_use_case, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await resubmit_use_case.execute(make_command())

        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_only_invoice_seller(self, resubmit_use_case, mock_invoice_repo):
        invoice = make_invoice(InvoiceStatus.CORRECTION_REQUESTED, correction_notes="wrong price")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await resubmit_use_case.execute(make_command(actor_id=BUYER_ID))

        assert result.error.code == "NOT_AUTHORIZED"
        assert invoice.status == InvoiceStatus.CORRECTION_REQUESTED

    @pytest.mark.parametrize(
        "status", [InvoiceStatus.SENT, InvoiceStatus.APPROVED, InvoiceStatus.PAID]
    )
    async def test_only_from_correction_requested(
        self, resubmit_use_case, mock_invoice_repo, mock_invoice_line_repo, status
    ):
        invoice = make_invoice(status)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await resubmit_use_case.execute(make_command())

        assert result.error.code == "INVOICE_NOT_CORRECTABLE"
        assert invoice.subtotal == Decimal("19.99")
        mock_invoice_line_repo.replace_for_invoice.assert_not_called()

    async def test_items_validated(self, resubmit_use_case, mock_invoice_repo, mock_uow):
        invoice = make_invoice(InvoiceStatus.CORRECTION_REQUESTED, correction_notes="wrong price")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await resubmit_use_case.execute(make_command(items=[]))

        assert result.error.code == "VALIDATION_ERROR"
        assert invoice.correction_notes == "wrong price"
        mock_uow.commit.assert_not_called()

    async def test_discount_bound(self, resubmit_use_case, mock_invoice_repo):
        invoice = make_invoice(InvoiceStatus.CORRECTION_REQUESTED, correction_notes="wrong price")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        result = await resubmit_use_case.execute(make_command(discount=Decimal("19.01")))

        assert result.error.code == "DISCOUNT_EXCEEDS_SUBTOTAL"
        assert invoice.status == InvoiceStatus.CORRECTION_REQUESTED

    async def test_failure_rolls_back(
        self, resubmit_use_case, mock_invoice_repo, mock_invoice_line_repo, mock_uow
    ):
        invoice = make_invoice(InvoiceStatus.CORRECTION_REQUESTED, correction_notes="wrong price")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_line_repo.replace_for_invoice = AsyncMock(side_effect=RuntimeError("boom"))

        result = await resubmit_use_case.execute(make_command())

        assert result.error.code == "UPDATE_INVOICE_FAILED"
        mock_uow.rollback.assert_called_once()
