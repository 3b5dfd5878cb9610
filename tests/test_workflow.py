"""Tests for the request -> approve -> pay workflow."""

from collections.abc import Callable

import pytest

from land_registry.auth import AuthContext
from land_registry.exceptions import (
    AlreadyPaidError,
    BuyerNotVerifiedError,
    LandKindMismatchError,
    LandNotFoundError,
    NotRegisteredError,
    RequestNotApprovedError,
    RequestNotFoundError,
    SellerNotVerifiedError,
    UnauthorizedError,
)
from land_registry.models.registry import LandFields, RequestStatus
from land_registry.registry import LandRegistry


@pytest.fixture
def market(
    registry: LandRegistry,
    seller_auth: AuthContext,
    land_fields: LandFields,
    make_seller: Callable[..., str],
    make_buyer: Callable[..., str],
) -> LandRegistry:
    """Registry with a verified seller, a verified buyer, land 1 (whole) and land 2 (5 fractions)."""
    seller = make_seller(registry)
    make_buyer(registry)
    registry.add_land(seller_auth, seller, land_fields)
    registry.add_fractional_land(seller_auth, seller, land_fields, 5)
    return registry


class TestCreateRequest:
    """Tests for request_land and request_fractional_land."""

    def test_request_whole_land(
        self, market: LandRegistry, seller: str, buyer: str, buyer_auth: AuthContext
    ) -> None:
        request = market.request_land(buyer_auth, buyer, seller, 1)

        assert request.request_id == 1
        assert request.seller_id == seller
        assert request.buyer_id == buyer
        assert request.land_id == 1
        assert request.is_fractional_purchase is False
        assert request.fraction_id is None
        assert request.status == RequestStatus.CREATED
        assert market.requests_count == 1

    def test_request_fractional_land(
        self, market: LandRegistry, seller: str, buyer: str, buyer_auth: AuthContext
    ) -> None:
        request = market.request_fractional_land(buyer_auth, buyer, seller, 2)

        assert request.is_fractional_purchase is True
        assert request.fraction_id == 1

    def test_whole_entry_point_rejects_fractional_land(
        self, market: LandRegistry, seller: str, buyer: str, buyer_auth: AuthContext
    ) -> None:
        with pytest.raises(LandKindMismatchError, match="request_fractional_land"):
            market.request_land(buyer_auth, buyer, seller, 2)

        assert market.requests_count == 0

    def test_fractional_entry_point_rejects_whole_land(
        self, market: LandRegistry, seller: str, buyer: str, buyer_auth: AuthContext
    ) -> None:
        with pytest.raises(LandKindMismatchError, match="request_land"):
            market.request_fractional_land(buyer_auth, buyer, seller, 1)

        assert market.get_reserved_fractions(2) == 0

    def test_unknown_land(
        self, market: LandRegistry, seller: str, buyer: str, buyer_auth: AuthContext
    ) -> None:
        with pytest.raises(LandNotFoundError):
            market.request_land(buyer_auth, buyer, seller, 99)

    def test_unverified_buyer(
        self,
        market: LandRegistry,
        seller: str,
        make_buyer: Callable[..., str],
    ) -> None:
        pending = make_buyer(market, "GBUYER0002", verify=False)

        with pytest.raises(BuyerNotVerifiedError):
            market.request_land(AuthContext.signed_by(pending), pending, seller, 1)

    def test_unregistered_buyer(self, market: LandRegistry, seller: str) -> None:
        with pytest.raises(NotRegisteredError):
            market.request_land(AuthContext.signed_by("GSTRANGER"), "GSTRANGER", seller, 1)

    def test_buyer_must_sign(
        self, market: LandRegistry, seller: str, buyer: str, seller_auth: AuthContext
    ) -> None:
        with pytest.raises(UnauthorizedError):
            market.request_land(seller_auth, buyer, seller, 1)

    def test_request_ids_are_shared_across_kinds(
        self, market: LandRegistry, seller: str, buyer: str, buyer_auth: AuthContext
    ) -> None:
        whole = market.request_land(buyer_auth, buyer, seller, 1)
        fraction = market.request_fractional_land(buyer_auth, buyer, seller, 2)

        assert (whole.request_id, fraction.request_id) == (1, 2)
        assert [r.request_id for r in market.requests_for_buyer(buyer)] == [1, 2]
        assert [r.request_id for r in market.requests_for_seller(seller)] == [1, 2]


class TestApproveRequest:
    """Tests for approve_request."""

    def test_approve(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_land(buyer_auth, buyer, seller, 1)

        approved = market.approve_request(seller_auth, seller, request.request_id)

        assert approved.approved is True
        assert approved.status == RequestStatus.APPROVED
        assert market.get_request(request.request_id).approved is True

    def test_reapproval_is_allowed(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_land(buyer_auth, buyer, seller, 1)
        market.approve_request(seller_auth, seller, request.request_id)

        again = market.approve_request(seller_auth, seller, request.request_id)

        assert again.approved is True

    def test_other_seller_cannot_approve(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        buyer_auth: AuthContext,
        make_seller: Callable[..., str],
    ) -> None:
        other = make_seller(market, "GSELLER0002")
        request = market.request_land(buyer_auth, buyer, seller, 1)

        with pytest.raises(UnauthorizedError):
            market.approve_request(AuthContext.signed_by(other), other, request.request_id)

        assert market.get_request(request.request_id).approved is False

    def test_unverified_seller_cannot_approve(
        self,
        market: LandRegistry,
        inspector: str,
        inspector_auth: AuthContext,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_land(buyer_auth, buyer, seller, 1)
        market.reject_seller(inspector_auth, inspector, seller)

        with pytest.raises(SellerNotVerifiedError):
            market.approve_request(seller_auth, seller, request.request_id)

    def test_unknown_request(
        self, market: LandRegistry, seller: str, seller_auth: AuthContext
    ) -> None:
        with pytest.raises(RequestNotFoundError):
            market.approve_request(seller_auth, seller, 42)


class TestPay:
    """Tests for pay."""

    def test_pay_whole_land(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_land(buyer_auth, buyer, seller, 1)
        market.approve_request(seller_auth, seller, request.request_id)

        receipt = market.pay(buyer_auth, buyer, request.request_id)

        assert receipt.request.payment_received is True
        assert receipt.request.status == RequestStatus.PAID
        assert receipt.fraction is None
        # Whole parcels change hands only through transfer_ownership
        assert market.get_land_owner(1) == seller

    def test_pay_fraction_finalizes_it(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_fractional_land(buyer_auth, buyer, seller, 2)
        market.approve_request(seller_auth, seller, request.request_id)

        receipt = market.pay(buyer_auth, buyer, request.request_id)

        assert receipt.fraction is not None
        assert receipt.fraction.owner == buyer
        assert receipt.fraction.fraction_id == 1
        assert receipt.fraction.fraction_percentage == 20
        assert market.get_land(2).fractions_sold == 1

    def test_pay_before_approval(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_fractional_land(buyer_auth, buyer, seller, 2)

        with pytest.raises(RequestNotApprovedError):
            market.pay(buyer_auth, buyer, request.request_id)

        assert market.get_request(request.request_id).payment_received is False
        assert market.get_land(2).fractions_sold == 0

    def test_pay_twice(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_fractional_land(buyer_auth, buyer, seller, 2)
        market.approve_request(seller_auth, seller, request.request_id)
        market.pay(buyer_auth, buyer, request.request_id)

        with pytest.raises(AlreadyPaidError):
            market.pay(buyer_auth, buyer, request.request_id)

        assert market.get_land(2).fractions_sold == 1
        assert market.get_land_fraction_owners(2) == [buyer]

    def test_approval_after_payment_keeps_it_paid(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
    ) -> None:
        request = market.request_land(buyer_auth, buyer, seller, 1)
        market.approve_request(seller_auth, seller, request.request_id)
        market.pay(buyer_auth, buyer, request.request_id)

        market.approve_request(seller_auth, seller, request.request_id)

        assert market.get_request(request.request_id).status == RequestStatus.PAID

    def test_other_buyer_cannot_pay(
        self,
        market: LandRegistry,
        seller: str,
        buyer: str,
        seller_auth: AuthContext,
        buyer_auth: AuthContext,
        make_buyer: Callable[..., str],
    ) -> None:
        other = make_buyer(market, "GBUYER0002")
        request = market.request_land(buyer_auth, buyer, seller, 1)
        market.approve_request(seller_auth, seller, request.request_id)

        with pytest.raises(UnauthorizedError):
            market.pay(AuthContext.signed_by(other), other, request.request_id)

        assert market.get_request(request.request_id).payment_received is False

    def test_pay_unknown_request(
        self, market: LandRegistry, buyer: str, buyer_auth: AuthContext
    ) -> None:
        with pytest.raises(RequestNotFoundError):
            market.pay(buyer_auth, buyer, 5)
