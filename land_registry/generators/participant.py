"""Synthetic identities and participant profiles."""

from __future__ import annotations

from typing import Iterator

from land_registry.generators.base import BaseGenerator
from land_registry.models.registry import BuyerProfile, SellerProfile

# Base32 alphabet used by Stellar account ids
_ADDRESS_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"


class ParticipantGenerator(BaseGenerator):
    """Generate identities and seller/buyer profiles."""

    AGE_RANGE = (21, 75)

    def identity(self) -> str:
        """A 56-character account id starting with ``G``."""
        return "G" + "".join(self.random.choices(_ADDRESS_ALPHABET, k=55))

    def seller_profile(self) -> SellerProfile:
        """Generate a seller profile."""
        return SellerProfile(
            name=self.fake.name(),
            age=self.random.randint(*self.AGE_RANGE),
            aadhar_number=self._aadhar(),
            pan_number=self._pan(),
            lands_owned=str(self.random.randint(0, 5)),
            document=self._document(),
        )

    def buyer_profile(self) -> BuyerProfile:
        """Generate a buyer profile."""
        return BuyerProfile(
            name=self.fake.name(),
            age=self.random.randint(*self.AGE_RANGE),
            city=self.fake.city(),
            aadhar_number=self._aadhar(),
            pan_number=self._pan(),
            document=self._document(),
            email=self.fake.email(),
        )

    def generate_buyers(self, count: int) -> Iterator[tuple[str, BuyerProfile]]:
        """Yield ``count`` (identity, profile) pairs for buyers."""
        for _ in range(count):
            yield self.identity(), self.buyer_profile()

    def _aadhar(self) -> str:
        return self.fake.numerify("#### #### ####")

    def _pan(self) -> str:
        # AAAAA9999A
        return self.fake.bothify("?????####?", letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ")

    def _document(self) -> str:
        return "Qm" + self.fake.lexify("?" * 44, letters="abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ123456789")
