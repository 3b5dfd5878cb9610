"""Whole-parcel sale scenario with inspector transfers."""

import logging
import random

from land_registry.auth import AuthContext
from land_registry.clock import FixedClock
from land_registry.events import EventSink
from land_registry.generators import LandGenerator, ParticipantGenerator
from land_registry.models.registry import BuyerProfile
from land_registry.registry import LandRegistry

logger = logging.getLogger(__name__)


class WholeSaleScenario:
    """Sell whole parcels, one per buyer, and transfer them.

    Every buyer requests a parcel from one of the sellers; the seller
    approves, the buyer pays and the inspector transfers ownership.
    A share of sellers (``rejection_rate``) is rejected by the inspector
    and never lists land.
    """

    def __init__(
        self,
        num_sellers: int = 3,
        num_buyers: int = 5,
        rejection_rate: float = 0.0,
        seed: int | None = None,
        sink: EventSink | None = None,
    ) -> None:
        self.num_sellers = num_sellers
        self.num_buyers = num_buyers
        self.rejection_rate = rejection_rate
        self.seed = seed

        self._random = random.Random(seed)
        self.registry = LandRegistry(clock=FixedClock(), sink=sink)
        self._people = ParticipantGenerator(seed=seed)
        self._lands = LandGenerator(seed=seed)

        self.inspector = self._people.identity()
        self.sellers: list[str] = []
        self.rejected_sellers: list[str] = []
        self.transfers: dict[int, str] = {}

    def generate(self) -> LandRegistry:
        """Run the scenario and return the populated registry."""
        logger.info(
            "Starting whole sale scenario: %d sellers, %d buyers",
            self.num_sellers,
            self.num_buyers,
        )
        registry = self.registry
        inspector_auth = AuthContext.signed_by(self.inspector)
        registry.initialize(inspector_auth, self.inspector, "Chief Inspector", 50, "Land Inspector")

        for _ in range(self.num_sellers):
            seller = self._people.identity()
            registry.register_seller(AuthContext.signed_by(seller), seller, self._people.seller_profile())
            if self._random.random() < self.rejection_rate:
                registry.reject_seller(inspector_auth, self.inspector, seller)
                self.rejected_sellers.append(seller)
            else:
                registry.verify_seller(inspector_auth, self.inspector, seller)
                self.sellers.append(seller)

        if not self.sellers:
            logger.warning("No verified sellers; nothing to sell")
            return registry

        for buyer, profile in self._people.generate_buyers(self.num_buyers):
            self._sell_to(buyer, profile, inspector_auth)

        logger.info(
            "Whole sale complete: %d lands, %d transfers",
            registry.lands_count,
            len(self.transfers),
        )
        return registry

    def _sell_to(self, buyer: str, profile: BuyerProfile, inspector_auth: AuthContext) -> None:
        registry = self.registry
        buyer_auth = AuthContext.signed_by(buyer)
        registry.register_buyer(buyer_auth, buyer, profile)
        registry.verify_buyer(inspector_auth, self.inspector, buyer)

        seller = self._random.choice(self.sellers)
        seller_auth = AuthContext.signed_by(seller)
        land = registry.add_land(seller_auth, seller, self._lands.generate())

        request = registry.request_land(buyer_auth, buyer, seller, land.land_id)
        registry.approve_request(seller_auth, seller, request.request_id)
        registry.pay(buyer_auth, buyer, request.request_id)
        registry.transfer_ownership(inspector_auth, self.inspector, land.land_id, buyer)
        self.transfers[land.land_id] = buyer
