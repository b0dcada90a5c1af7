"""ListEligibleBuyers Use Case

Buyers a seller can address an invoice to.
"""

from libs.result import Result, Return, Error
from src.app.services.actor_directory import ActorDirectory
from src.domain.actor import ActorRole
from .dtos import BuyerDTO, ListBuyersResponseDTO
from .errors import not_authorized


class ListEligibleBuyers:
    """
    Use Case: List KYC-verified buyers

    Business Rules:
    1. Only sellers may browse buyers
    2. Only buyers with completed KYC are returned
    """

    def __init__(self, actor_directory: ActorDirectory):
        self.actor_directory = actor_directory

    async def execute(self, actor_id: str) -> Result[ListBuyersResponseDTO]:
        try:
            actor = await self.actor_directory.lookup_actor(actor_id)
            if not actor or actor.role != ActorRole.SELLER:
                return Return.err(
                    not_authorized(
                        "Only sellers can list buyers",
                        reason=f"actor {actor_id} is not a seller",
                    )
                )

            buyers = await self.actor_directory.list_verified_buyers()
            return Return.ok(
                ListBuyersResponseDTO(
                    buyers=[
                        BuyerDTO(
                            actor_id=buyer.actor_id,
                            name=buyer.name,
                            email=buyer.email,
                            business_name=buyer.business_name,
                        )
                        for buyer in buyers
                        if buyer.role == ActorRole.BUYER and buyer.kyc_completed
                    ]
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_BUYERS_FAILED",
                    message="Failed to list buyers",
                    reason=str(e),
                )
            )
