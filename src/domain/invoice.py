"""Invoice Domain Entity

Tracks invoices issued by sellers to KYC-verified buyers and their review
status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, Date, Integer, Numeric, String, Text
from src.domain.base import BaseModel


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    SENT = "sent"
    APPROVED = "approved"
    CORRECTION_REQUESTED = "correction_requested"
    PAID = "paid"


class Invoice(BaseModel, table=True):
    """
    Invoice - Seller-to-buyer invoice

    Domain Rules:
    - invoice_number is unique and never reassigned
    - buyer_id != seller_id
    - subtotal, tax, discount and total are derived together (see invoice_pricing)
    - 0 <= discount <= subtotal
    - Status transitions follow invoice_workflow.TRANSITION_RULES
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_seller_id', 'seller_id'),
        Index('ix_invoices_buyer_id', 'buyer_id'),
        Index('ix_invoices_created_at', 'created_at'),
        CheckConstraint('buyer_id <> seller_id', name='buyer_is_not_seller'),
        CheckConstraint('tax >= 0', name='tax_non_negative'),
        CheckConstraint('discount >= 0 AND discount <= subtotal', name='discount_within_subtotal'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(Integer, "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
        description="Unique invoice identifier (auto-increment)"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique display number (e.g., INV-000001)"
    )

    seller_id: str = Field(
        description="Issuing seller actor ID"
    )

    buyer_id: str = Field(
        description="Receiving buyer actor ID"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.SENT,
        description="Invoice status (sent, approved, correction_requested, paid)"
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Sum of line totals"
    )

    tax: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Tax amount"
    )

    discount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Discount amount (never above subtotal)"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="subtotal + tax - discount"
    )

    notes: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Free-text notes from the seller"
    )

    correction_notes: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Buyer's correction request, cleared on resubmission"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_number": "INV-000001",
                "seller_id": "5b0c9a7e-2f1d-4c8e-9a53-0d7f3b2e6a11",
                "buyer_id": "c3e1f9d2-7a4b-4e6f-8c1d-2b9a0e5f7d34",
                "status": "sent",
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
