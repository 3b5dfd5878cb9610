"""Purchase request workflow: request, approve, pay."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from land_registry.auth import AuthContext
from land_registry.clock import Clock
from land_registry.config import RegistryConfig
from land_registry.exceptions import (
    AlreadyPaidError,
    LandKindMismatchError,
    RequestNotApprovedError,
    RequestNotFoundError,
    UnauthorizedError,
)
from land_registry.models.registry import (
    CounterName,
    DataKey,
    FractionRecord,
    PurchaseRequest,
    Role,
)
from land_registry.registry.base import RegistryComponent
from land_registry.registry.catalog import LandCatalog
from land_registry.registry.fractions import FractionAllocator
from land_registry.registry.identity import IdentityRegistry
from land_registry.store import RecordStore, StoreKey

logger = logging.getLogger(__name__)


def request_key(request_id: int) -> StoreKey:
    return StoreKey.of(DataKey.REQUEST, request_id)


@dataclass
class PaymentReceipt:
    """Outcome of a successful payment."""

    request: PurchaseRequest
    fraction: FractionRecord | None = None


class RequestWorkflow(RegistryComponent):
    """Drive purchase requests through CREATED -> APPROVED -> PAID.

    Payment is terminal; there is no refund or cancellation. Paying a
    fractional request finalizes the fraction through the allocator, while
    whole parcels change hands only through the inspector's transfer.
    """

    def __init__(
        self,
        store: RecordStore,
        identities: IdentityRegistry,
        catalog: LandCatalog,
        fractions: FractionAllocator,
        clock: Clock | None = None,
        config: RegistryConfig | None = None,
    ) -> None:
        super().__init__(store, clock, config)
        self.identities = identities
        self.catalog = catalog
        self.fractions = fractions

    def create_request(
        self,
        auth: AuthContext,
        buyer: str,
        seller_id: str,
        land_id: int,
        fractional: bool,
    ) -> PurchaseRequest:
        """Create a purchase request through the whole or fractional entry point.

        Raises
        ------
        LandKindMismatchError
            If ``fractional`` does not match the parcel kind.
        """
        auth.require_auth(buyer)
        self.identities.require_verified(buyer, Role.BUYER)

        with self.store.transaction():
            land = self.load_land(land_id)
            if land.is_fractional and not fractional:
                raise LandKindMismatchError(
                    f"Land {land_id} is fractional, use request_fractional_land instead"
                )
            if not land.is_fractional and fractional:
                raise LandKindMismatchError(
                    f"Land {land_id} is not fractional, use request_land instead"
                )

            fraction_id = self.fractions.request_fraction(land, buyer) if fractional else None

            request = PurchaseRequest(
                request_id=self.store.next_id(CounterName.REQUESTS),
                seller_id=seller_id,
                buyer_id=buyer,
                land_id=land_id,
                is_fractional_purchase=fractional,
                fraction_id=fraction_id,
                created_at=self.clock.now(),
            )
            self.store.set(request_key(request.request_id), request)

        logger.info(
            "Buyer %s requested land %d (request %d%s)",
            buyer,
            land_id,
            request.request_id,
            f", fraction {fraction_id}" if fractional else "",
        )
        return request

    def request_land(
        self, auth: AuthContext, buyer: str, seller_id: str, land_id: int
    ) -> PurchaseRequest:
        return self.create_request(auth, buyer, seller_id, land_id, fractional=False)

    def request_fractional_land(
        self, auth: AuthContext, buyer: str, seller_id: str, land_id: int
    ) -> PurchaseRequest:
        return self.create_request(auth, buyer, seller_id, land_id, fractional=True)

    def approve_request(self, auth: AuthContext, seller: str, request_id: int) -> PurchaseRequest:
        """Approve a request addressed to ``seller``. Re-approving is allowed."""
        auth.require_auth(seller)
        self.identities.require_verified(seller, Role.SELLER)

        with self.store.transaction():
            request = self.get(request_id)
            if request.seller_id != seller:
                raise UnauthorizedError(
                    f"Only the seller can approve request {request_id}"
                )
            request.approved = True
            self.store.set(request_key(request_id), request)

        logger.info("Seller %s approved request %d", seller, request_id)
        return request

    def pay(self, auth: AuthContext, buyer: str, request_id: int) -> PaymentReceipt:
        """Record payment for an approved request.

        Raises
        ------
        RequestNotApprovedError
            If the seller has not approved the request.
        AlreadyPaidError
            If the request was already paid.
        """
        auth.require_auth(buyer)

        with self.store.transaction():
            request = self.get(request_id)
            if request.buyer_id != buyer:
                raise UnauthorizedError(f"Only the buyer can pay request {request_id}")
            if not request.approved:
                raise RequestNotApprovedError(f"Request {request_id} not approved")
            if request.payment_received:
                raise AlreadyPaidError(f"Payment for request {request_id} already received")

            request.payment_received = True
            self.store.set(request_key(request_id), request)

            fraction = None
            if request.is_fractional_purchase:
                fraction = self.fractions.finalize_fraction(
                    request.land_id,
                    buyer,
                    request.fraction_id,
                    self.clock.now(),
                )

        logger.info("Buyer %s paid request %d", buyer, request_id)
        return PaymentReceipt(request=request, fraction=fraction)

    # Query methods
    def get(self, request_id: int) -> PurchaseRequest:
        request = self.store.get(request_key(request_id))
        if request is None:
            raise RequestNotFoundError(f"Request {request_id} not found")
        return request

    def count(self) -> int:
        return self.store.counter(CounterName.REQUESTS)

    def all_requests(self) -> list[PurchaseRequest]:
        return [self.get(request_id) for request_id in range(1, self.count() + 1)]

    def requests_for_seller(self, seller: str) -> list[PurchaseRequest]:
        return [r for r in self.all_requests() if r.seller_id == seller]

    def requests_for_buyer(self, buyer: str) -> list[PurchaseRequest]:
        return [r for r in self.all_requests() if r.buyer_id == buyer]
