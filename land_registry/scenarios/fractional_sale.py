"""Fractional sale scenario: one parcel split among many buyers."""

import logging
from typing import Any

from land_registry.auth import AuthContext
from land_registry.clock import FixedClock
from land_registry.config import RegistryConfig
from land_registry.events import EventSink
from land_registry.generators import LandGenerator, ParticipantGenerator
from land_registry.models.registry import FractionPolicy, LandParcel
from land_registry.registry import LandRegistry

logger = logging.getLogger(__name__)


class FractionalSaleScenario:
    """Sell a fractional parcel to a set of verified buyers.

    This scenario drives the whole workflow end to end:
    - inspector initialization
    - seller registration and verification
    - listing a fractional parcel
    - buyer registration and verification
    - request, approval and payment for one fraction per buyer
    """

    def __init__(
        self,
        num_buyers: int = 10,
        total_fractions: int = 10,
        total_price: int = 1_000_000,
        seed: int | None = None,
        policy: FractionPolicy = FractionPolicy.RESERVED,
        sink: EventSink | None = None,
    ) -> None:
        """Initialize fractional sale scenario.

        Parameters
        ----------
        num_buyers : int
            Buyers who attempt to buy one fraction each. Buyers beyond
            ``total_fractions`` are turned away.
        total_fractions : int
            Number of fractions the parcel is split into.
        total_price : int
            Total parcel price.
        seed : int | None
            Random seed for reproducibility.
        policy : FractionPolicy
            Fraction id policy of the registry.
        sink : EventSink | None
            Receives registry events.
        """
        self.num_buyers = num_buyers
        self.total_fractions = total_fractions
        self.total_price = total_price
        self.seed = seed

        self.registry = LandRegistry(
            clock=FixedClock(),
            config=RegistryConfig(fraction_policy=policy),
            sink=sink,
        )
        self._people = ParticipantGenerator(seed=seed)
        self._lands = LandGenerator(seed=seed)

        self.inspector = self._people.identity()
        self.seller = self._people.identity()
        self.buyers: list[str] = []
        self.rejected_buyers: list[str] = []
        self.land: LandParcel | None = None

    def generate(self) -> LandRegistry:
        """Run the scenario.

        Returns
        -------
        LandRegistry
            Registry holding every record the scenario produced.
        """
        logger.info(
            "Starting fractional sale scenario: %d buyers, %d fractions",
            self.num_buyers,
            self.total_fractions,
        )
        registry = self.registry
        inspector_auth = AuthContext.signed_by(self.inspector)
        seller_auth = AuthContext.signed_by(self.seller)

        registry.initialize(inspector_auth, self.inspector, "Chief Inspector", 50, "Land Inspector")
        registry.register_seller(seller_auth, self.seller, self._people.seller_profile())
        registry.verify_seller(inspector_auth, self.inspector, self.seller)

        fields = self._lands.generate(price=self.total_price)
        self.land = registry.add_fractional_land(seller_auth, self.seller, fields, self.total_fractions)
        registry.verify_land(inspector_auth, self.inspector, self.land.land_id)

        for buyer, profile in self._people.generate_buyers(self.num_buyers):
            buyer_auth = AuthContext.signed_by(buyer)
            registry.register_buyer(buyer_auth, buyer, profile)
            registry.verify_buyer(inspector_auth, self.inspector, buyer)

            if registry.get_available_fractions(self.land.land_id) == 0:
                self.rejected_buyers.append(buyer)
                continue

            request = registry.request_fractional_land(
                buyer_auth, buyer, self.seller, self.land.land_id
            )
            registry.approve_request(seller_auth, self.seller, request.request_id)
            registry.pay(buyer_auth, buyer, request.request_id)
            self.buyers.append(buyer)

        self.land = registry.get_land(self.land.land_id)
        logger.info(
            "Fractional sale complete: %d/%d fractions sold, %d buyers turned away",
            self.land.fractions_sold,
            self.land.total_fractions,
            len(self.rejected_buyers),
        )
        return registry

    def get_sale_summary(self) -> dict[str, Any]:
        """Sale statistics for the generated parcel."""
        if self.land is None:
            return {}
        land_id = self.land.land_id
        return {
            "land_id": land_id,
            "total_fractions": self.land.total_fractions,
            "fractions_sold": self.land.fractions_sold,
            "available_fractions": self.registry.get_available_fractions(land_id),
            "price_per_fraction": self.land.price_per_fraction,
            "owners": len(self.registry.get_land_fraction_owners(land_id)),
            "turned_away": len(self.rejected_buyers),
        }
