"""Fraction slot assignment and per-fraction ownership records."""

from __future__ import annotations

import logging
from datetime import datetime

from land_registry.exceptions import (
    AllFractionsSoldError,
    DuplicateFractionOwnerError,
    FractionNotFoundError,
)
from land_registry.models.registry import (
    DataKey,
    FractionPolicy,
    FractionRecord,
    LandParcel,
)
from land_registry.registry.base import RegistryComponent
from land_registry.registry.catalog import land_key
from land_registry.store import StoreKey

logger = logging.getLogger(__name__)


def fraction_key(land_id: int, fraction_id: int) -> StoreKey:
    return StoreKey.of(DataKey.FRACTION, land_id, fraction_id)


def owners_key(land_id: int) -> StoreKey:
    return StoreKey.of(DataKey.FRACTION_OWNERS, land_id)


def reservations_key(land_id: int) -> StoreKey:
    return StoreKey.of(DataKey.FRACTION_RESERVATIONS, land_id)


def pending_key(land_id: int) -> StoreKey:
    return StoreKey.of(DataKey.PENDING_FRACTION_BUYERS, land_id)


def user_lands_key(identity: str) -> StoreKey:
    return StoreKey.of(DataKey.USER_FRACTIONAL_LANDS, identity)


class FractionAllocator(RegistryComponent):
    """Hand out fraction ids and record fraction ownership.

    Under ``FractionPolicy.RESERVED`` a fraction id is claimed when the
    request is created, in the same step that checks capacity, so every id
    in ``1..total_fractions`` is issued at most once and ``fractions_sold``
    can never pass ``total_fractions``.

    Under ``FractionPolicy.LEGACY`` the id is ``fractions_sold + 1`` at
    request time and nothing is claimed. Two requests created before either
    is paid receive the same id; paying both overwrites the record at that
    id and counts two sales.
    """

    @property
    def policy(self) -> FractionPolicy:
        return self.config.fraction_policy

    def request_fraction(self, land: LandParcel, buyer: str) -> int:
        """Validate a fractional request and return its fraction id.

        Raises
        ------
        AllFractionsSoldError
            If no fraction is left for this request.
        DuplicateFractionOwnerError
            If the buyer already owns (or, under RESERVED, has claimed) a
            fraction of the land.
        """
        land_id = land.land_id
        owners = self.owners(land_id)

        if self.policy == FractionPolicy.LEGACY:
            if land.fractions_sold >= land.total_fractions:
                raise AllFractionsSoldError(f"All fractions of land {land_id} have been sold")
            if buyer in owners:
                raise DuplicateFractionOwnerError(
                    f"Buyer {buyer} already owns a fraction of land {land_id}"
                )
            return land.fractions_sold + 1

        reserved = self.reserved(land_id)
        if land.fractions_sold >= land.total_fractions or reserved >= land.total_fractions:
            raise AllFractionsSoldError(f"All fractions of land {land_id} have been sold")
        if buyer in owners or buyer in self.store.get(pending_key(land_id), []):
            raise DuplicateFractionOwnerError(
                f"Buyer {buyer} already owns a fraction of land {land_id}"
            )

        fraction_id = reserved + 1
        with self.store.transaction():
            self.store.set(reservations_key(land_id), fraction_id)
            self.store.append(pending_key(land_id), buyer)

        logger.debug("Reserved fraction %d of land %d for %s", fraction_id, land_id, buyer)
        return fraction_id

    def finalize_fraction(
        self,
        land_id: int,
        buyer: str,
        fraction_id: int,
        timestamp: datetime,
    ) -> FractionRecord:
        """Record ``buyer`` as owner of ``fraction_id`` and count the sale."""
        with self.store.transaction():
            land = self.load_land(land_id)
            record = FractionRecord(
                land_id=land_id,
                fraction_id=fraction_id,
                owner=buyer,
                fraction_percentage=self.config.percentage_base // land.total_fractions,
                purchase_date=timestamp,
            )
            if self.store.has(fraction_key(land_id, fraction_id)):
                logger.warning(
                    "Overwriting fraction %d of land %d (legacy id collision)",
                    fraction_id,
                    land_id,
                )
            self.store.set(fraction_key(land_id, fraction_id), record)

            land.fractions_sold += 1
            self.store.set(land_key(land_id), land)

            self.store.append(owners_key(land_id), buyer)
            self.store.append(user_lands_key(buyer), land_id)

            if self.policy == FractionPolicy.RESERVED:
                pending = self.store.get(pending_key(land_id), [])
                if buyer in pending:
                    pending.remove(buyer)
                self.store.set(pending_key(land_id), pending)

        logger.info(
            "Fraction %d of land %d (%d%%) sold to %s",
            fraction_id,
            land_id,
            record.fraction_percentage,
            buyer,
        )
        return record

    # Query methods
    def get(self, land_id: int, fraction_id: int) -> FractionRecord:
        record = self.store.get(fraction_key(land_id, fraction_id))
        if record is None:
            raise FractionNotFoundError(
                f"Fraction {fraction_id} of land {land_id} not found"
            )
        return record

    def owners(self, land_id: int) -> list[str]:
        """Buyers who paid for a fraction of the land, in payment order."""
        return self.store.get(owners_key(land_id), [])

    def user_lands(self, identity: str) -> list[int]:
        """Land ids in which ``identity`` owns a fraction."""
        return self.store.get(user_lands_key(identity), [])

    def reserved(self, land_id: int) -> int:
        """Fraction ids handed out so far under RESERVED (0 under LEGACY)."""
        return self.store.get(reservations_key(land_id), 0)

    def available(self, land_id: int) -> int:
        return self.load_land(land_id).available_fractions

    def records(self, land_id: int) -> list[FractionRecord]:
        """All fraction records stored for the land, by fraction id."""
        return [
            self.store.get(key)
            for key in self.store.keys(DataKey.FRACTION)
            if key.ident[0] == land_id
        ]
