"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Business validation
(item contents, amounts, buyer eligibility) happens in the use cases so that
every rule violation is reported with the same error codes.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field
from src.app.use_cases.invoicing.dtos import LineItemInputDTO


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for issuing an invoice

    Used for POST /invoices endpoint. The seller is the authenticated actor.
    """

    buyer_id: Optional[str] = Field(
        default=None,
        description="Buyer actor ID (required)"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Payment due date (required)"
    )

    items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Line items (at least one)"
    )

    tax: Decimal = Field(
        default=Decimal("0"),
        description="Tax amount (>= 0)"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        description="Discount amount (>= 0, <= subtotal)"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes printed on the invoice"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "buyer_id": "c3e1f9d2-7a4b-4e6f-8c1d-2b9a0e5f7d34",
                "due_date": "2024-02-29",
                "items": [
                    {"name": "Consulting", "description": "January", "quantity": "10", "price": "85.00"}
                ],
                "tax": "170.00",
                "discount": "0",
                "notes": "Payment within 30 days"
            }
        }


class ResubmitInvoiceRequestSchema(BaseModel):
    """
    Request schema for resubmitting a corrected invoice

    Used for PUT /invoices/{invoice_id} endpoint.
    """

    items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Replacement line items (at least one)"
    )

    tax: Decimal = Field(
        default=Decimal("0"),
        description="Tax amount (>= 0)"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        description="Discount amount (>= 0, <= subtotal)"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes"
    )


class UpdateStatusRequestSchema(BaseModel):
    """
    Request schema for a status change

    Used for PUT /invoices/{invoice_id}/status endpoint. The acting role is
    the authenticated actor's role.
    """

    status: str = Field(
        ...,
        description="Requested status (sent, approved, correction_requested, paid)"
    )

    correction_notes: Optional[str] = Field(
        default=None,
        description="What the seller should fix (required for correction_requested)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "status": "correction_requested",
                "correction_notes": "Unit price should be 80.00"
            }
        }
