from typing import Optional
from fastapi import Depends, Header, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.actor_directory import SqlAlchemyActorDirectory
from src.api.error import ClientError
from src.app.services.actor_directory import ActorProfile

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_current_actor(
    actor_id: Optional[str] = Header(default=None, alias=ApplicationConfig.ACTOR_ID_HEADER),
    session: AsyncSession = Depends(get_session),
) -> ActorProfile:
    """Resolve the authenticated caller forwarded by the gateway"""
    if not actor_id:
        raise ClientError(
            Error(
                code="UNAUTHENTICATED",
                message="Not authorized - no actor provided",
                reason=f"missing {ApplicationConfig.ACTOR_ID_HEADER} header",
            ),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    actor = await SqlAlchemyActorDirectory(session).lookup_actor(actor_id)
    if not actor:
        raise ClientError(
            Error(
                code="UNAUTHENTICATED",
                message="Actor not found",
                reason=f"unknown actor {actor_id}",
            ),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return actor
