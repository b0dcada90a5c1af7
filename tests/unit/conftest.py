import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.actor_directory import ActorProfile
from src.domain.actor import ActorRole
from tests.fixtures.factories import BUYER_ID, SELLER_ID


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow

@pytest.fixture
def mock_invoice_repo():
    """Mock invoice repository"""
    return MagicMock()

@pytest.fixture
def mock_invoice_line_repo():
    """Mock invoice line repository"""
    return MagicMock()

@pytest.fixture
def seller_profile():
    return ActorProfile(
        actor_id=SELLER_ID,
        role=ActorRole.SELLER,
        kyc_completed=True,
        name="Sam Seller",
        email="sam@seller.test",
        business_name="Seller Ltd",
    )

@pytest.fixture
def buyer_profile():
    return ActorProfile(
        actor_id=BUYER_ID,
        role=ActorRole.BUYER,
        kyc_completed=True,
        name="Bea Buyer",
        email="bea@buyer.test",
        business_name="Buyer Co",
    )

@pytest.fixture
def mock_actor_directory(seller_profile, buyer_profile):
    """Directory knowing one seller and one verified buyer"""
    profiles = {SELLER_ID: seller_profile, BUYER_ID: buyer_profile}

    directory = MagicMock()
    directory.lookup_actor = AsyncMock(side_effect=lambda actor_id: profiles.get(actor_id))
    directory.list_verified_buyers = AsyncMock(return_value=[buyer_profile])
    directory.profiles = profiles
    return directory
