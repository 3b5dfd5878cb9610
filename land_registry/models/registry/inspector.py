"""Land inspector model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Inspector:
    """The single authority that verifies participants and land."""

    identity: str
    name: str
    age: int
    designation: str
    inspector_id: int = 1
    created_at: datetime | None = None
