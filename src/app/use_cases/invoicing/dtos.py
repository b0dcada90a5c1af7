"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field
from src.domain.actor import ActorRole


class LineItemInputDTO(BaseModel):
    """
    One line item as submitted by a seller

    Fields are optional here so that missing values surface as a
    VALIDATION_ERROR from the use case rather than a parsing failure.
    """

    name: Optional[str] = Field(
        default=None,
        description="Item name (required, non-blank)"
    )

    description: Optional[str] = Field(
        default=None,
        description="Optional item description"
    )

    quantity: Optional[Decimal] = Field(
        default=None,
        description="Quantity (must be > 0)"
    )

    price: Optional[Decimal] = Field(
        default=None,
        description="Unit price (must be >= 0)"
    )


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for issuing a new invoice

    Used as input to CreateInvoice use case.
    """

    seller_id: str = Field(
        ...,
        description="Authenticated seller actor ID"
    )

    buyer_id: Optional[str] = Field(
        default=None,
        description="Buyer actor ID (must have completed KYC)"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Payment due date"
    )

    items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Ordered line items (at least one)"
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

    class Config:
        json_schema_extra = {
            "example": {
                "seller_id": "5b0c9a7e-2f1d-4c8e-9a53-0d7f3b2e6a11",
                "buyer_id": "c3e1f9d2-7a4b-4e6f-8c1d-2b9a0e5f7d34",
                "due_date": "2024-02-29",
                "items": [{"name": "Widget", "quantity": "2", "price": "9.995"}],
                "tax": "1.00",
                "discount": "0.50",
                "notes": "Thank you for your business"
            }
        }


class ResubmitInvoiceCommandDTO(BaseModel):
    """
    Command DTO for resubmitting an invoice after a correction request

    Used as input to UpdateInvoiceAfterCorrection use case.
    """

    invoice_id: int = Field(
        ...,
        description="Invoice ID"
    )

    actor_id: str = Field(
        ...,
        description="Authenticated actor ID (must be the invoice's seller)"
    )

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


class UpdateStatusCommandDTO(BaseModel):
    """
    Command DTO for a status change

    Used as input to UpdateInvoiceStatus use case.
    """

    invoice_id: int = Field(
        ...,
        description="Invoice ID"
    )

    actor_id: str = Field(
        ...,
        description="Authenticated actor ID"
    )

    actor_role: ActorRole = Field(
        ...,
        description="Role the actor is acting in (buyer, seller)"
    )

    status: str = Field(
        ...,
        description="Requested status (sent, approved, correction_requested, paid)"
    )

    correction_notes: Optional[str] = Field(
        default=None,
        description="Required when a buyer requests a correction"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "actor_id": "c3e1f9d2-7a4b-4e6f-8c1d-2b9a0e5f7d34",
                "actor_role": "buyer",
                "status": "correction_requested",
                "correction_notes": "wrong price"
            }
        }


class InvoiceLineDTO(BaseModel):
    """Line item within an invoice response"""

    id: int = Field(..., description="Line item ID")
    name: str = Field(..., description="Item name")
    description: str = Field(default="", description="Item description")
    quantity: Decimal = Field(..., description="Quantity")
    price: Decimal = Field(..., description="Unit price")
    total: Decimal = Field(..., description="Line total (quantity * price)")


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for a single invoice with its line items

    Returned by CreateInvoice, UpdateInvoiceAfterCorrection,
    UpdateInvoiceStatus and GetInvoice.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Display number (INV-000001)")
    seller_id: str = Field(..., description="Seller actor ID")
    buyer_id: str = Field(..., description="Buyer actor ID")
    status: str = Field(..., description="Invoice status")
    items: List[InvoiceLineDTO] = Field(default_factory=list, description="Line items in entry order")
    subtotal: Decimal = Field(..., description="Sum of line totals")
    tax: Decimal = Field(..., description="Tax amount")
    discount: Decimal = Field(..., description="Discount amount")
    total: Decimal = Field(..., description="subtotal + tax - discount")
    notes: str = Field(default="", description="Seller notes")
    correction_notes: str = Field(default="", description="Buyer correction request")
    due_date: date = Field(..., description="Payment due date")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "invoice_number": "INV-000001",
                "seller_id": "5b0c9a7e-2f1d-4c8e-9a53-0d7f3b2e6a11",
                "buyer_id": "c3e1f9d2-7a4b-4e6f-8c1d-2b9a0e5f7d34",
                "status": "sent",
                "items": [
                    {
                        "id": 1,
                        "name": "Widget",
                        "description": "",
                        "quantity": "2",
                        "price": "9.995",
                        "total": "19.99"
                    }
                ],
                "subtotal": "19.99",
                "tax": "1.00",
                "discount": "0.50",
                "total": "20.49",
                "notes": "",
                "correction_notes": "",
                "due_date": "2024-02-29",
                "created_at": "2024-01-31T00:00:00Z",
                "updated_at": "2024-01-31T00:00:00Z"
            }
        }


class InvoiceSummaryDTO(BaseModel):
    """Invoice row in a listing (no line items)"""

    invoice_id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Display number")
    seller_id: str = Field(..., description="Seller actor ID")
    buyer_id: str = Field(..., description="Buyer actor ID")
    status: str = Field(..., description="Invoice status")
    total: Decimal = Field(..., description="Invoice total")
    due_date: date = Field(..., description="Payment due date")
    created_at: datetime = Field(..., description="Creation timestamp")


class ListInvoicesResponseDTO(BaseModel):
    """
    Response DTO for listing an actor's invoices

    Returned by ListInvoices use case.
    """

    invoices: List[InvoiceSummaryDTO] = Field(
        default_factory=list,
        description="Invoices, newest first"
    )

    limit: int = Field(..., description="Page size")
    offset: int = Field(..., description="Page offset")


class BuyerDTO(BaseModel):
    """KYC-verified buyer a seller may invoice"""

    actor_id: str = Field(..., description="Buyer actor ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact email")
    business_name: Optional[str] = Field(default=None, description="Business name from KYC")


class ListBuyersResponseDTO(BaseModel):
    """
    Response DTO for eligible buyers

    Returned by ListEligibleBuyers use case.
    """

    buyers: List[BuyerDTO] = Field(default_factory=list, description="Eligible buyers")


class InvoicePdfResponseDTO(BaseModel):
    """
    Response DTO for invoice PDF export

    Returned by GenerateInvoicePdf use case.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Display number")
    filename: str = Field(..., description="Suggested download filename")
    pdf_base64: str = Field(..., description="PDF document, base64-encoded")
    generated_at: datetime = Field(..., description="Generation timestamp")
