"""Invoice number format

Display identifiers look like INV-000042: a fixed prefix followed by the
sequence value zero-padded to six digits.
"""

import re

INVOICE_NUMBER_PREFIX = "INV-"
INVOICE_NUMBER_WIDTH = 6

_INVOICE_NUMBER_RE = re.compile(r"^INV-(\d{6,})$")


class InvoiceNumberConflict(Exception):
    """Raised when an allocated invoice number collides with an existing one"""

    def __init__(self, invoice_number: str):
        super().__init__(f"Invoice number {invoice_number} is already taken")
        self.invoice_number = invoice_number


def format_invoice_number(sequence: int) -> str:
    if sequence < 1:
        raise ValueError(f"Invoice sequence must be positive, got {sequence}")
    return f"{INVOICE_NUMBER_PREFIX}{sequence:0{INVOICE_NUMBER_WIDTH}d}"


def parse_invoice_number(invoice_number: str) -> int:
    match = _INVOICE_NUMBER_RE.match(invoice_number or "")
    if not match:
        raise ValueError(f"Malformed invoice number: {invoice_number!r}")
    return int(match.group(1))


def is_valid_invoice_number(invoice_number: str) -> bool:
    return bool(_INVOICE_NUMBER_RE.match(invoice_number or ""))
