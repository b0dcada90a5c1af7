"""Actor Directory Interface

Read-only view of buyer and seller accounts owned by the identity service.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.actor import ActorRole


class ActorProfile(BaseModel):
    """What the invoicing core needs to know about an actor"""

    actor_id: str = Field(..., description="Actor identifier")
    role: ActorRole = Field(..., description="Actor role (buyer, seller)")
    kyc_completed: bool = Field(default=False, description="KYC onboarding complete")
    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Contact email")
    business_name: Optional[str] = Field(default=None, description="Business name from KYC")


class ActorDirectory(ABC):
    """
    Directory interface for actor lookups

    Used to check buyer eligibility at invoice creation and to resolve the
    authenticated caller on every request.
    """

    @abstractmethod
    async def lookup_actor(self, actor_id: str) -> Optional[ActorProfile]:
        """
        Retrieve an actor profile

        Args:
            actor_id: Actor identifier

        Returns:
            ActorProfile if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_verified_buyers(self) -> List[ActorProfile]:
        """
        Retrieve every buyer that completed KYC

        Returns:
            List of buyer profiles ordered by name
        """
        pass
