"""Input validation shared by invoice creation and resubmission"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence
from libs.result import Result, Return, Error
from src.domain.invoice_pricing import InvoiceTotals, LineItem
from .dtos import LineItemInputDTO
from .errors import DISCOUNT_EXCEEDS_SUBTOTAL, validation_error

# Quantity and price are stored as NUMERIC(18, 6), currency amounts as NUMERIC(18, 2)
UNIT_SCALE = Decimal("0.000001")
UNIT_LIMIT = Decimal(10) ** 12
AMOUNT_LIMIT = Decimal(10) ** 16


def _is_number(value: Optional[Decimal]) -> bool:
    return value is not None and value.is_finite()


def _to_unit_scale(value: Optional[Decimal]) -> Optional[Decimal]:
    """Round to the stored scale, or None when the value cannot be stored"""
    if not _is_number(value) or abs(value) >= UNIT_LIMIT:
        return None
    scaled = value.quantize(UNIT_SCALE, rounding=ROUND_HALF_UP)
    if abs(scaled) >= UNIT_LIMIT:
        return None
    return scaled


def validate_line_items(items: Sequence[LineItemInputDTO]) -> Result[List[LineItem]]:
    """
    Check every item and convert to domain LineItems

    Quantity and price are rounded half-up to six decimal places, so line
    totals are priced from exactly the values that get stored. Fails on the
    first offending item, reporting its 1-based position.
    """
    if not items:
        return Return.err(validation_error("At least one item is required"))

    line_items = []
    for index, item in enumerate(items, start=1):
        name = (item.name or "").strip()
        if not name:
            return Return.err(validation_error(f"Item {index} is missing a name"))

        quantity = _to_unit_scale(item.quantity)
        if quantity is None or quantity <= 0:
            return Return.err(
                validation_error(
                    f"Item {index} has an invalid quantity",
                    reason=(
                        "quantity must be a number greater than 0 after rounding to "
                        f"6 decimal places and less than {UNIT_LIMIT}"
                    ),
                )
            )

        price = _to_unit_scale(item.price)
        if price is None or price < 0:
            return Return.err(
                validation_error(
                    f"Item {index} has an invalid price",
                    reason=f"price must be a number of at least 0 and less than {UNIT_LIMIT}",
                )
            )

        line_items.append(
            LineItem(
                name=name,
                description=(item.description or "").strip(),
                quantity=quantity,
                price=price,
            )
        )

    return Return.ok(line_items)


def validate_adjustments(tax: Decimal, discount: Decimal) -> Optional[Error]:
    if not _is_number(tax) or tax < 0:
        return validation_error("Tax cannot be negative", reason="tax must be a number of at least 0")
    if not _is_number(discount) or discount < 0:
        return validation_error(
            "Discount cannot be negative", reason="discount must be a number of at least 0"
        )
    if tax >= AMOUNT_LIMIT:
        return validation_error("Tax is too large", reason=f"tax must be less than {AMOUNT_LIMIT}")
    if discount >= AMOUNT_LIMIT:
        return validation_error(
            "Discount is too large", reason=f"discount must be less than {AMOUNT_LIMIT}"
        )
    return None


def check_totals(totals: InvoiceTotals) -> Optional[Error]:
    """Reject priced invoices whose amounts cannot be stored or whose discount is too big"""
    for label, amount in (
        ("subtotal", totals.subtotal),
        ("tax", totals.tax),
        ("discount", totals.discount),
        ("total", totals.total),
    ):
        if abs(amount) >= AMOUNT_LIMIT:
            return validation_error(
                "Invoice amounts are too large",
                reason=f"{label}={amount} must be less than {AMOUNT_LIMIT}",
            )
    if totals.discount_exceeds_subtotal:
        return Error(
            code=DISCOUNT_EXCEEDS_SUBTOTAL,
            message="Discount cannot be greater than subtotal",
            reason=f"discount={totals.discount}, subtotal={totals.subtotal}",
        )
    return None
