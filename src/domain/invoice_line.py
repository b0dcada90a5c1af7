"""Invoice Line Domain Entity

Tracks individual line items within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - Individual line item within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - position keeps the order the seller entered the items in
    - total = round2(quantity * price)
    - Replaced as a whole when the seller resubmits a corrected invoice
    """

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index('ix_invoice_lines_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(Integer, "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
        description="Unique invoice line identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Zero-based order within the invoice"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Item name"
    )

    description: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Optional item description"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity (> 0, may be fractional)"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Unit price (>= 0)"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Line total (quantity * price, rounded to cents)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Line item creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_id": 1,
                "position": 0,
                "name": "Widget",
                "description": "Oak, hand finished",
                "quantity": "2.000000",
                "price": "9.995000",
                "total": "19.99",
                "created_at": "2024-01-31T00:00:00Z"
            }
        }
