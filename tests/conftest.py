"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from land_registry.auth import AuthContext
from land_registry.clock import FixedClock
from land_registry.config import RegistryConfig
from land_registry.models.registry import (
    BuyerProfile,
    FractionPolicy,
    LandFields,
    SellerProfile,
)
from land_registry.registry import LandRegistry

INSPECTOR = "GINSPECTOR0001"
SELLER = "GSELLER0001"
BUYER = "GBUYER0001"


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def inspector() -> str:
    return INSPECTOR


@pytest.fixture
def seller() -> str:
    return SELLER


@pytest.fixture
def buyer() -> str:
    return BUYER


@pytest.fixture
def inspector_auth() -> AuthContext:
    return AuthContext.signed_by(INSPECTOR)


@pytest.fixture
def seller_auth() -> AuthContext:
    return AuthContext.signed_by(SELLER)


@pytest.fixture
def buyer_auth() -> AuthContext:
    return AuthContext.signed_by(BUYER)


@pytest.fixture
def seller_profile() -> SellerProfile:
    """Sample seller profile."""
    return SellerProfile(
        name="Ravi Kumar",
        age=45,
        aadhar_number="1234 5678 9012",
        pan_number="ABCDE1234F",
        lands_owned="2",
        document="QmSellerDoc",
    )


@pytest.fixture
def buyer_profile() -> BuyerProfile:
    """Sample buyer profile."""
    return BuyerProfile(
        name="Anita Sharma",
        age=32,
        city="Pune",
        aadhar_number="9876 5432 1098",
        pan_number="PQRST6789Z",
        document="QmBuyerDoc",
        email="anita@example.com",
    )


@pytest.fixture
def land_fields() -> LandFields:
    """Sample land listing worth 1,000,000."""
    return LandFields(
        area=1200,
        city="Pune",
        state="Maharashtra",
        price=1_000_000,
        property_pid=123456,
        survey_number=42,
        ipfs_hash="QmLandImage",
        document="QmLandDoc",
    )


def _build_registry(policy: FractionPolicy) -> LandRegistry:
    registry = LandRegistry(
        clock=FixedClock(),
        config=RegistryConfig(fraction_policy=policy),
    )
    registry.initialize(AuthContext.signed_by(INSPECTOR), INSPECTOR, "Inspector", 50, "Chief")
    return registry


@pytest.fixture
def registry() -> LandRegistry:
    """Initialized registry with the default (RESERVED) fraction policy."""
    return _build_registry(FractionPolicy.RESERVED)


@pytest.fixture
def legacy_registry() -> LandRegistry:
    """Initialized registry reproducing the legacy fraction id behaviour."""
    return _build_registry(FractionPolicy.LEGACY)


@pytest.fixture
def make_seller(seller_profile: SellerProfile) -> Callable[..., str]:
    """Factory registering (and by default verifying) a seller."""

    def _make(registry: LandRegistry, identity: str = SELLER, verify: bool = True) -> str:
        registry.register_seller(AuthContext.signed_by(identity), identity, seller_profile)
        if verify:
            registry.verify_seller(AuthContext.signed_by(INSPECTOR), INSPECTOR, identity)
        return identity

    return _make


@pytest.fixture
def make_buyer(buyer_profile: BuyerProfile) -> Callable[..., str]:
    """Factory registering (and by default verifying) a buyer."""

    def _make(registry: LandRegistry, identity: str = BUYER, verify: bool = True) -> str:
        registry.register_buyer(AuthContext.signed_by(identity), identity, buyer_profile)
        if verify:
            registry.verify_buyer(AuthContext.signed_by(INSPECTOR), INSPECTOR, identity)
        return identity

    return _make


@pytest.fixture
def buy_fraction() -> Callable[..., int]:
    """Run request -> approve -> pay for one fraction; returns the request id."""

    def _buy(registry: LandRegistry, buyer: str, land_id: int, seller: str = SELLER) -> int:
        buyer_auth = AuthContext.signed_by(buyer)
        request = registry.request_fractional_land(buyer_auth, buyer, seller, land_id)
        registry.approve_request(AuthContext.signed_by(seller), seller, request.request_id)
        registry.pay(buyer_auth, buyer, request.request_id)
        return request.request_id

    return _buy
