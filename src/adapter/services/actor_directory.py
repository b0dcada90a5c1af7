"""SQLAlchemy Actor Directory Implementation

Reads actor profiles from the actors table.
"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.actor_directory import ActorDirectory, ActorProfile
from src.domain.actor import Actor, ActorRole


def to_profile(actor: Actor) -> ActorProfile:
    return ActorProfile(
        actor_id=actor.id,
        role=actor.role,
        kyc_completed=actor.kyc_completed,
        name=actor.name,
        email=actor.email,
        business_name=actor.business_name,
    )


class SqlAlchemyActorDirectory(ActorDirectory):
    """
    SQLAlchemy implementation of ActorDirectory

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def lookup_actor(self, actor_id: str) -> Optional[ActorProfile]:
        """
        Retrieve an actor profile

        Args:
            actor_id: Actor identifier

        Returns:
            ActorProfile if found, None otherwise
        """
        statement = select(Actor).where(Actor.id == actor_id)
        result = await self.session.execute(statement)
        actor = result.scalar_one_or_none()
        return to_profile(actor) if actor else None

    async def list_verified_buyers(self) -> List[ActorProfile]:
        """
        Retrieve every buyer that completed KYC

        Returns:
            List of buyer profiles ordered by name
        """
        statement = (
            select(Actor)
            .where(Actor.role == ActorRole.BUYER)
            .where(Actor.kyc_completed == True)  # noqa: E712
            .order_by(Actor.name)
        )
        result = await self.session.execute(statement)
        return [to_profile(actor) for actor in result.scalars().all()]
