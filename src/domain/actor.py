"""Actor Domain Entity

Buyers and sellers as known to the invoicing service. Registration, password
storage and KYC intake are handled by the identity service; this table is
only read here.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class ActorRole(str, Enum):
    """Actor role types"""
    BUYER = "buyer"
    SELLER = "seller"


class Actor(BaseModel, table=True):
    """
    Actor - A buyer or seller account

    Domain Rules:
    - email is unique
    - Only buyers with kyc_completed=True may be invoiced
    """

    __tablename__ = "actors"
    __table_args__ = (
        Index('ix_actors_role_kyc', 'role', 'kyc_completed'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique actor identifier (uuid)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True),
        description="Login email (unique)"
    )

    role: ActorRole = Field(
        description="Actor role (buyer, seller)"
    )

    kyc_completed: bool = Field(
        default=False,
        description="Whether KYC onboarding is complete"
    )

    business_name: Optional[str] = Field(
        default=None,
        description="Registered business name from KYC"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Actor creation timestamp"
    )
