"""Base models shared across the registry."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for the registry event feed."""

    event_id: str
    event_type: str  # entity.action (e.g., request.paid)
    event_time: datetime
    source: str  # Component that emitted it
    subject: str  # Identity or id of the entity affected
    data: dict
    metadata: dict = field(default_factory=dict)
