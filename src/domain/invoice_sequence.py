"""Invoice Sequence Domain Entity

Monotonic counter backing invoice number allocation.
"""

from sqlmodel import Field, Column
from sqlalchemy import BigInteger, CheckConstraint, String
from src.domain.base import BaseModel

INVOICE_SEQUENCE_NAME = "invoice"


class InvoiceSequence(BaseModel, table=True):
    """
    Invoice Sequence - Last issued value of a named counter

    Domain Rules:
    - last_value only ever increases
    - Incremented in place (UPDATE ... SET last_value = last_value + 1) so
      concurrent allocations serialize on the row
    """

    __tablename__ = "invoice_sequences"
    __table_args__ = (
        CheckConstraint('last_value >= 0', name='sequence_non_negative'),
    )

    name: str = Field(
        sa_column=Column(String(50), primary_key=True),
        description="Counter name"
    )

    last_value: int = Field(
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Last value handed out"
    )
