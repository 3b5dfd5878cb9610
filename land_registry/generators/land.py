"""Synthetic land parcel fields."""

from __future__ import annotations

from land_registry.generators.base import BaseGenerator
from land_registry.models.registry import LandFields


class LandGenerator(BaseGenerator):
    """Generate descriptive fields for land listings."""

    AREA_RANGE = (100, 50_000)  # Square feet
    PRICE_PER_SQFT_RANGE = (500, 20_000)

    def generate(self, price: int | None = None) -> LandFields:
        """Generate one listing.

        Parameters
        ----------
        price : int | None
            Fixed total price; derived from the area when omitted.
        """
        area = self.random.randint(*self.AREA_RANGE)
        if price is None:
            price = area * self.random.randint(*self.PRICE_PER_SQFT_RANGE)

        return LandFields(
            area=area,
            city=self.fake.city(),
            state=self.fake.state(),
            price=price,
            property_pid=self.random.randint(100_000, 999_999),
            survey_number=self.random.randint(1, 9_999),
            ipfs_hash="Qm" + self.fake.sha256()[:44],
            document="Qm" + self.fake.sha256()[:44],
        )
