"""Error codes for invoicing use cases

Every failure a use case returns carries one of these codes; ERROR_KINDS
groups them so transport layers can map a whole class at once.
"""

from enum import Enum
from typing import Dict, Optional
from libs.result import Error


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    INTERNAL = "internal"


# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
DISCOUNT_EXCEEDS_SUBTOTAL = "DISCOUNT_EXCEEDS_SUBTOTAL"

# Not found / precondition
INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
BUYER_NOT_FOUND = "BUYER_NOT_FOUND"
BUYER_KYC_INCOMPLETE = "BUYER_KYC_INCOMPLETE"

# Authorization
NOT_AUTHORIZED = "NOT_AUTHORIZED"
INVALID_STATUS_FOR_ROLE = "INVALID_STATUS_FOR_ROLE"
INVALID_TRANSITION = "INVALID_TRANSITION"
INVOICE_NOT_CORRECTABLE = "INVOICE_NOT_CORRECTABLE"

# Conflict
INVOICE_NUMBER_CONFLICT = "INVOICE_NUMBER_CONFLICT"

ERROR_KINDS: Dict[str, ErrorKind] = {
    VALIDATION_ERROR: ErrorKind.VALIDATION,
    DISCOUNT_EXCEEDS_SUBTOTAL: ErrorKind.VALIDATION,
    INVOICE_NOT_FOUND: ErrorKind.NOT_FOUND,
    BUYER_NOT_FOUND: ErrorKind.NOT_FOUND,
    BUYER_KYC_INCOMPLETE: ErrorKind.NOT_FOUND,
    NOT_AUTHORIZED: ErrorKind.AUTHORIZATION,
    INVALID_STATUS_FOR_ROLE: ErrorKind.AUTHORIZATION,
    INVALID_TRANSITION: ErrorKind.AUTHORIZATION,
    INVOICE_NOT_CORRECTABLE: ErrorKind.AUTHORIZATION,
    INVOICE_NUMBER_CONFLICT: ErrorKind.CONFLICT,
}


def error_kind(error: Error) -> ErrorKind:
    """Kind of an error; unknown codes (the *_FAILED family) are internal"""
    return ERROR_KINDS.get(error.code, ErrorKind.INTERNAL)


def validation_error(message: str, reason: Optional[str] = None) -> Error:
    return Error(code=VALIDATION_ERROR, message=message, reason=reason or "Invalid input")


def invoice_not_found(invoice_id: int) -> Error:
    return Error(
        code=INVOICE_NOT_FOUND,
        message=f"Invoice with ID {invoice_id} not found",
        reason="Invoice does not exist",
    )


def not_authorized(message: str, reason: Optional[str] = None) -> Error:
    return Error(
        code=NOT_AUTHORIZED,
        message=message,
        reason=reason or "Actor is not a party to this invoice",
    )
