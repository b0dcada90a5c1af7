import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401
from src.depends import get_session
from src.domain.actor import Actor, ActorRole


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a fresh SQLite database file for each test"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'invoices_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def actors(db_session):
    """One seller, one verified buyer, one unverified buyer"""
    seller = Actor(
        id="seller-1",
        name="Sam Seller",
        email="sam@seller.test",
        role=ActorRole.SELLER,
        kyc_completed=True,
        business_name="Seller Ltd",
    )
    buyer = Actor(
        id="buyer-1",
        name="Bea Buyer",
        email="bea@buyer.test",
        role=ActorRole.BUYER,
        kyc_completed=True,
        business_name="Buyer Co",
    )
    unverified = Actor(
        id="buyer-2",
        name="Uma Unverified",
        email="uma@buyer.test",
        role=ActorRole.BUYER,
        kyc_completed=False,
    )
    db_session.add_all([seller, buyer, unverified])
    await db_session.commit()
    return {"seller": seller, "buyer": buyer, "unverified": unverified}


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
