"""Land parcel and fraction models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class LandFields:
    """Descriptive fields a seller supplies when listing land."""

    area: int
    city: str
    state: str
    price: int
    property_pid: int
    survey_number: int
    ipfs_hash: str
    document: str


@dataclass
class LandParcel:
    """A registered land parcel, sold whole or as fixed fractions."""

    land_id: int
    area: int
    city: str
    state: str
    land_price: int
    property_pid: int
    physical_survey_number: int
    ipfs_hash: str
    document: str
    is_fractional: bool = False
    total_fractions: int = 0
    fractions_sold: int = 0
    price_per_fraction: int = 0
    created_at: datetime | None = None

    @property
    def available_fractions(self) -> int:
        """Unsold fractions; 0 for whole parcels."""
        if not self.is_fractional:
            return 0
        return max(0, self.total_fractions - self.fractions_sold)


@dataclass
class FractionRecord:
    """Ownership of one fraction of a fractional parcel."""

    land_id: int
    fraction_id: int
    owner: str
    fraction_percentage: int  # e.g. 10 for 10%
    purchase_date: datetime
