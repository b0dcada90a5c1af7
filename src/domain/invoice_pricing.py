"""Invoice pricing

All currency figures are rounded half-up to cents through ``round2``, once per
derivation step: each line total, the subtotal, tax, discount and the final
total.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple, Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps the shortest repr, so 9.995 stays 9.995 and not 9.99499...
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Number) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineItem:
    """Validated line item input"""
    name: str
    quantity: Decimal
    price: Decimal
    description: str = ""


@dataclass(frozen=True)
class PricedLine:
    name: str
    description: str
    quantity: Decimal
    price: Decimal
    total: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    lines: Tuple[PricedLine, ...]
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal

    @property
    def discount_exceeds_subtotal(self) -> bool:
        return self.discount > self.subtotal


def price_line(item: LineItem) -> PricedLine:
    quantity = to_decimal(item.quantity)
    price = to_decimal(item.price)
    return PricedLine(
        name=item.name.strip(),
        description=(item.description or "").strip(),
        quantity=quantity,
        price=price,
        total=round2(quantity * price),
    )


def price_invoice(
    items: Iterable[LineItem],
    tax: Optional[Number] = None,
    discount: Optional[Number] = None,
) -> InvoiceTotals:
    """
    Derive line totals and invoice aggregates

    Does not enforce discount <= subtotal; callers check
    ``InvoiceTotals.discount_exceeds_subtotal`` and reject.
    """
    lines = tuple(price_line(item) for item in items)
    subtotal = round2(sum((line.total for line in lines), Decimal("0")))
    rounded_tax = round2(tax if tax is not None else 0)
    rounded_discount = round2(discount if discount is not None else 0)
    total = round2(subtotal + rounded_tax - rounded_discount)
    return InvoiceTotals(
        lines=lines,
        subtotal=subtotal,
        tax=rounded_tax,
        discount=rounded_discount,
        total=total,
    )
