"""Registry entry point wiring identity, catalog, fractions and workflow."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from land_registry.auth import AuthContext
from land_registry.clock import Clock, SystemClock
from land_registry.config import RegistryConfig
from land_registry.events import DEFAULT_SOURCE, EventSink, EventType, build_event
from land_registry.exceptions import (
    AlreadyInitializedError,
    LandRegistryError,
    NotInitializedError,
)
from land_registry.models.base import Event
from land_registry.models.registry import (
    BuyerProfile,
    FractionRecord,
    Inspector,
    LandFields,
    LandParcel,
    Participant,
    PurchaseRequest,
    Role,
    SellerProfile,
)
from land_registry.registry.base import INSPECTOR_KEY
from land_registry.registry.catalog import LandCatalog
from land_registry.registry.fractions import FractionAllocator
from land_registry.registry.identity import IdentityRegistry
from land_registry.registry.workflow import PaymentReceipt, RequestWorkflow
from land_registry.store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_EVENT_HISTORY = 1000


class LandRegistry:
    """Land ownership registry governed by a single inspector.

    Every mutating operation takes the caller's ``AuthContext`` and the
    identity it acts as. An operation either applies completely or raises a
    ``LandRegistryError`` and leaves the store untouched. Its events are
    handed to the sink before the store commits, so a sink failure aborts
    the operation too.

    Parameters
    ----------
    store : RecordStore | None
        Record store (a fresh in-memory store by default).
    clock : Clock | None
        Timestamp source.
    config : RegistryConfig | None
        Fraction policy and limits.
    sink : EventSink | None
        Receives every published event.
    event_history : int
        Number of recent events kept in ``events``.
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        clock: Clock | None = None,
        config: RegistryConfig | None = None,
        sink: EventSink | None = None,
        source: str = DEFAULT_SOURCE,
        event_history: int = DEFAULT_EVENT_HISTORY,
    ) -> None:
        self.store = store if store is not None else RecordStore()
        self.clock = clock or SystemClock()
        self.config = config or RegistryConfig()
        self.sink = sink
        self.source = source
        self.events: deque[Event] = deque(maxlen=event_history)
        self._pending: list[Event] = []

        self.identities = IdentityRegistry(self.store, self.clock, self.config)
        self.catalog = LandCatalog(self.store, self.identities, self.clock, self.config)
        self.fractions = FractionAllocator(self.store, self.clock, self.config)
        self.workflow = RequestWorkflow(
            self.store,
            self.identities,
            self.catalog,
            self.fractions,
            self.clock,
            self.config,
        )

    # Inspector
    def initialize(
        self,
        auth: AuthContext,
        inspector: str,
        name: str,
        age: int,
        designation: str,
    ) -> Inspector:
        """Install the inspector. Can only succeed once."""
        with self._operation("initialize", inspector, require_initialized=False):
            auth.require_auth(inspector)
            if self.store.has(INSPECTOR_KEY):
                raise AlreadyInitializedError("Registry already initialized")
            record = Inspector(
                identity=inspector,
                name=name,
                age=age,
                designation=designation,
                created_at=self.clock.now(),
            )
            self.store.set(INSPECTOR_KEY, record)
            self._publish(EventType.REGISTRY_INITIALIZED, inspector, record)

        logger.info("Registry initialized with inspector %s", inspector)
        return record

    def is_land_inspector(self, identity: str) -> bool:
        return self.identities.is_land_inspector(identity)

    def get_inspector(self) -> Inspector:
        inspector = self.identities.inspector()
        if inspector is None:
            raise NotInitializedError("Registry has no inspector yet")
        return inspector

    # Participants
    def register_seller(self, auth: AuthContext, caller: str, profile: SellerProfile) -> Participant:
        with self._operation("register_seller", caller):
            seller = self.identities.register_seller(auth, caller, profile)
            self._publish(EventType.PARTICIPANT_REGISTERED, caller, seller)
        return seller

    def register_buyer(self, auth: AuthContext, caller: str, profile: BuyerProfile) -> Participant:
        with self._operation("register_buyer", caller):
            buyer = self.identities.register_buyer(auth, caller, profile)
            self._publish(EventType.PARTICIPANT_REGISTERED, caller, buyer)
        return buyer

    def update_seller(self, auth: AuthContext, caller: str, profile: SellerProfile) -> Participant:
        with self._operation("update_seller", caller):
            seller = self.identities.update_seller(auth, caller, profile)
            self._publish(EventType.PARTICIPANT_UPDATED, caller, seller)
        return seller

    def update_buyer(self, auth: AuthContext, caller: str, profile: BuyerProfile) -> Participant:
        with self._operation("update_buyer", caller):
            buyer = self.identities.update_buyer(auth, caller, profile)
            self._publish(EventType.PARTICIPANT_UPDATED, caller, buyer)
        return buyer

    def verify(self, auth: AuthContext, inspector: str, identity: str, role: Role) -> Participant:
        with self._operation("verify", identity):
            participant = self.identities.verify(auth, inspector, identity, role)
            self._publish(EventType.PARTICIPANT_VERIFIED, identity, participant)
        return participant

    def reject(self, auth: AuthContext, inspector: str, identity: str, role: Role) -> Participant:
        with self._operation("reject", identity):
            participant = self.identities.reject(auth, inspector, identity, role)
            self._publish(EventType.PARTICIPANT_REJECTED, identity, participant)
        return participant

    def verify_seller(self, auth: AuthContext, inspector: str, seller_id: str) -> Participant:
        return self.verify(auth, inspector, seller_id, Role.SELLER)

    def reject_seller(self, auth: AuthContext, inspector: str, seller_id: str) -> Participant:
        return self.reject(auth, inspector, seller_id, Role.SELLER)

    def verify_buyer(self, auth: AuthContext, inspector: str, buyer_id: str) -> Participant:
        return self.verify(auth, inspector, buyer_id, Role.BUYER)

    def reject_buyer(self, auth: AuthContext, inspector: str, buyer_id: str) -> Participant:
        return self.reject(auth, inspector, buyer_id, Role.BUYER)

    # Land
    def add_land(self, auth: AuthContext, seller: str, fields: LandFields) -> LandParcel:
        with self._operation("add_land", seller):
            land = self.catalog.add_land(auth, seller, fields)
            self._publish(EventType.LAND_ADDED, land.land_id, land, owner=seller)
        return land

    def add_fractional_land(
        self,
        auth: AuthContext,
        seller: str,
        fields: LandFields,
        total_fractions: int,
    ) -> LandParcel:
        with self._operation("add_fractional_land", seller):
            land = self.catalog.add_fractional_land(auth, seller, fields, total_fractions)
            self._publish(EventType.LAND_ADDED, land.land_id, land, owner=seller)
        return land

    def verify_land(self, auth: AuthContext, inspector: str, land_id: int) -> None:
        with self._operation("verify_land", land_id):
            self.catalog.verify_land(auth, inspector, land_id)
            self._publish(EventType.LAND_VERIFIED, land_id, {"land_id": land_id, "verified": True})

    def transfer_ownership(
        self,
        auth: AuthContext,
        inspector: str,
        land_id: int,
        new_owner: str,
    ) -> None:
        with self._operation("transfer_ownership", land_id):
            previous = self.catalog.transfer_ownership(auth, inspector, land_id, new_owner)
            self._publish(
                EventType.LAND_OWNERSHIP_TRANSFERRED,
                land_id,
                {"land_id": land_id, "previous_owner": previous, "new_owner": new_owner},
            )

    # Requests
    def request_land(
        self, auth: AuthContext, buyer: str, seller_id: str, land_id: int
    ) -> PurchaseRequest:
        with self._operation("request_land", buyer):
            request = self.workflow.request_land(auth, buyer, seller_id, land_id)
            self._publish(EventType.REQUEST_CREATED, request.request_id, request)
        return request

    def request_fractional_land(
        self, auth: AuthContext, buyer: str, seller_id: str, land_id: int
    ) -> PurchaseRequest:
        with self._operation("request_fractional_land", buyer):
            request = self.workflow.request_fractional_land(auth, buyer, seller_id, land_id)
            self._publish(EventType.REQUEST_CREATED, request.request_id, request)
        return request

    def approve_request(self, auth: AuthContext, seller: str, request_id: int) -> PurchaseRequest:
        with self._operation("approve_request", request_id):
            request = self.workflow.approve_request(auth, seller, request_id)
            self._publish(EventType.REQUEST_APPROVED, request_id, request)
        return request

    def pay(self, auth: AuthContext, buyer: str, request_id: int) -> PaymentReceipt:
        with self._operation("pay", request_id):
            receipt = self.workflow.pay(auth, buyer, request_id)
            self._publish(EventType.REQUEST_PAID, request_id, receipt.request)
            if receipt.fraction is not None:
                self._publish(
                    EventType.FRACTION_FINALIZED,
                    receipt.fraction.land_id,
                    receipt.fraction,
                )
        return receipt

    # Point queries
    def get_participant(self, identity: str) -> Participant | None:
        return self.identities.get(identity)

    def get_seller(self, seller_id: str) -> Participant:
        return self.identities.require(seller_id, Role.SELLER)

    def get_buyer(self, buyer_id: str) -> Participant:
        return self.identities.require(buyer_id, Role.BUYER)

    def get_land(self, land_id: int) -> LandParcel:
        return self.catalog.get(land_id)

    def get_land_owner(self, land_id: int) -> str:
        return self.catalog.owner_of(land_id)

    def is_land_verified(self, land_id: int) -> bool:
        return self.catalog.is_verified(land_id)

    def get_request(self, request_id: int) -> PurchaseRequest:
        return self.workflow.get(request_id)

    def get_fractional_ownership(self, land_id: int, fraction_id: int) -> FractionRecord:
        return self.fractions.get(land_id, fraction_id)

    def get_land_fraction_owners(self, land_id: int) -> list[str]:
        return self.fractions.owners(land_id)

    def get_user_fractional_lands(self, identity: str) -> list[int]:
        return self.fractions.user_lands(identity)

    def get_available_fractions(self, land_id: int) -> int:
        return self.fractions.available(land_id)

    def get_reserved_fractions(self, land_id: int) -> int:
        return self.fractions.reserved(land_id)

    # Aggregates
    @property
    def lands_count(self) -> int:
        return self.catalog.count()

    @property
    def sellers_count(self) -> int:
        return self.identities.count(Role.SELLER)

    @property
    def buyers_count(self) -> int:
        return self.identities.count(Role.BUYER)

    @property
    def requests_count(self) -> int:
        return self.workflow.count()

    def seller_list(self) -> list[str]:
        return self.identities.members(Role.SELLER)

    def buyer_list(self) -> list[str]:
        return self.identities.members(Role.BUYER)

    def all_lands(self) -> list[LandParcel]:
        return self.catalog.all_lands()

    def lands_owned_by(self, identity: str) -> list[LandParcel]:
        return self.catalog.lands_owned_by(identity)

    def all_requests(self) -> list[PurchaseRequest]:
        return self.workflow.all_requests()

    def requests_for_seller(self, seller: str) -> list[PurchaseRequest]:
        return self.workflow.requests_for_seller(seller)

    def requests_for_buyer(self, buyer: str) -> list[PurchaseRequest]:
        return self.workflow.requests_for_buyer(buyer)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        lands = self.all_lands()
        requests = self.all_requests()
        return {
            "lands": self.lands_count,
            "fractional_lands": sum(1 for land in lands if land.is_fractional),
            "fractions_sold": sum(land.fractions_sold for land in lands),
            "sellers": self.sellers_count,
            "buyers": self.buyers_count,
            "requests": self.requests_count,
            "approved_requests": sum(1 for r in requests if r.approved),
            "paid_requests": sum(1 for r in requests if r.payment_received),
        }

    @contextmanager
    def _operation(
        self,
        operation: str,
        subject: str | int,
        require_initialized: bool = True,
    ) -> Iterator[None]:
        """Run one operation as a single store transaction.

        Events queued with ``_publish`` go to the sink before the commit;
        any error, the sink's included, discards the staged writes.
        """
        self._pending = []
        try:
            with self.store.transaction():
                if require_initialized and not self.store.has(INSPECTOR_KEY):
                    raise NotInitializedError("Registry has no inspector yet")
                yield
                if self.sink is not None:
                    for event in self._pending:
                        self.sink.publish(event)
        except LandRegistryError as exc:
            logger.warning(
                "%s rejected: %s",
                operation,
                exc,
                extra={"operation": operation, "subject": str(subject), "error": type(exc).__name__},
            )
            raise
        else:
            self.events.extend(self._pending)
            for event in self._pending:
                logger.debug("Published %s for %s", event.event_type, event.subject)
        finally:
            self._pending = []

    def _publish(self, event_type: EventType, subject: str | int, payload: Any, **metadata: Any) -> None:
        """Queue an event for the running operation."""
        self._pending.append(
            build_event(
                event_type,
                subject,
                payload,
                event_time=self.clock.now(),
                source=self.source,
                **metadata,
            )
        )
