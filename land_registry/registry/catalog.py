"""Land parcel listing, verification and ownership transfer."""

from __future__ import annotations

import logging

from land_registry.auth import AuthContext
from land_registry.clock import Clock
from land_registry.config import RegistryConfig
from land_registry.exceptions import (
    FractionalLandNotTransferableError,
    InvalidArgumentError,
    InvalidFractionCountError,
    LandNotFoundError,
)
from land_registry.models.registry import (
    CounterName,
    DataKey,
    LandFields,
    LandParcel,
    Role,
)
from land_registry.registry.base import RegistryComponent
from land_registry.registry.identity import IdentityRegistry
from land_registry.store import RecordStore, StoreKey

logger = logging.getLogger(__name__)


def land_key(land_id: int) -> StoreKey:
    return StoreKey.of(DataKey.LAND, land_id)


def owner_key(land_id: int) -> StoreKey:
    return StoreKey.of(DataKey.LAND_OWNER, land_id)


class LandCatalog(RegistryComponent):
    """Create whole or fractional parcels and track who owns them."""

    def __init__(
        self,
        store: RecordStore,
        identities: IdentityRegistry,
        clock: Clock | None = None,
        config: RegistryConfig | None = None,
    ) -> None:
        super().__init__(store, clock, config)
        self.identities = identities

    def add_land(self, auth: AuthContext, seller: str, fields: LandFields) -> LandParcel:
        """List a parcel that is sold whole."""
        return self._add(auth, seller, fields, total_fractions=None)

    def add_fractional_land(
        self,
        auth: AuthContext,
        seller: str,
        fields: LandFields,
        total_fractions: int,
    ) -> LandParcel:
        """List a parcel split into ``total_fractions`` equal shares.

        ``price_per_fraction`` is the integer quotient of the price by the
        number of fractions; any remainder is not distributed.
        """
        return self._add(auth, seller, fields, total_fractions=total_fractions)

    def verify_land(self, auth: AuthContext, inspector: str, land_id: int) -> None:
        """Set the advisory inspector verification flag on a parcel."""
        self.require_inspector(auth, inspector)
        with self.store.transaction():
            self.load_land(land_id)
            self.store.set(StoreKey.of(DataKey.LAND_VERIFIED, land_id), True)
        logger.info("Verified land %d", land_id)

    def transfer_ownership(
        self,
        auth: AuthContext,
        inspector: str,
        land_id: int,
        new_owner: str,
    ) -> str:
        """Reassign a whole parcel to ``new_owner``; returns the previous owner."""
        self.require_inspector(auth, inspector)
        with self.store.transaction():
            land = self.load_land(land_id)
            if land.is_fractional:
                raise FractionalLandNotTransferableError(
                    f"Cannot transfer ownership of fractional land {land_id}"
                )
            previous = self.owner_of(land_id)
            self.store.set(owner_key(land_id), new_owner)

        logger.info("Transferred land %d from %s to %s", land_id, previous, new_owner)
        return previous

    # Query methods
    def get(self, land_id: int) -> LandParcel:
        return self.load_land(land_id)

    def owner_of(self, land_id: int) -> str:
        owner = self.store.get(owner_key(land_id))
        if owner is None:
            raise LandNotFoundError(f"Owner of land {land_id} not found")
        return owner

    def is_verified(self, land_id: int) -> bool:
        return self.store.get(StoreKey.of(DataKey.LAND_VERIFIED, land_id), False)

    def count(self) -> int:
        return self.store.counter(CounterName.LANDS)

    def all_lands(self) -> list[LandParcel]:
        """Every parcel in id order."""
        return [self.load_land(land_id) for land_id in range(1, self.count() + 1)]

    def lands_owned_by(self, identity: str) -> list[LandParcel]:
        """Parcels whose current owner is ``identity``."""
        return [land for land in self.all_lands() if self.owner_of(land.land_id) == identity]

    def _add(
        self,
        auth: AuthContext,
        seller: str,
        fields: LandFields,
        total_fractions: int | None,
    ) -> LandParcel:
        auth.require_auth(seller)
        self.identities.require_verified(seller, Role.SELLER)

        if total_fractions is not None and not 1 <= total_fractions <= self.config.max_fractions:
            raise InvalidFractionCountError(
                f"Invalid number of fractions {total_fractions} "
                f"(must be 1-{self.config.max_fractions})"
            )
        if fields.price < 0:
            raise InvalidArgumentError(f"Land price must not be negative, got {fields.price}")
        if fields.area < 0:
            raise InvalidArgumentError(f"Land area must not be negative, got {fields.area}")

        fractional = total_fractions is not None
        with self.store.transaction():
            land_id = self.store.next_id(CounterName.LANDS)
            land = LandParcel(
                land_id=land_id,
                area=fields.area,
                city=fields.city,
                state=fields.state,
                land_price=fields.price,
                property_pid=fields.property_pid,
                physical_survey_number=fields.survey_number,
                ipfs_hash=fields.ipfs_hash,
                document=fields.document,
                is_fractional=fractional,
                total_fractions=total_fractions or 0,
                fractions_sold=0,
                price_per_fraction=fields.price // total_fractions if fractional else 0,
                created_at=self.clock.now(),
            )
            self.store.set(land_key(land_id), land)
            self.store.set(owner_key(land_id), seller)
            if fractional:
                self.store.set(StoreKey.of(DataKey.FRACTION_OWNERS, land_id), [])

        logger.info(
            "Seller %s added %s land %d",
            seller,
            "fractional" if fractional else "whole",
            land_id,
        )
        return land
