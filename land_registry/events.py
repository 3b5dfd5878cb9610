"""Domain events published after each successful registry mutation."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from land_registry.models.base import Event
from land_registry.sinks.serialization import to_dict

DEFAULT_SOURCE = "land-registry"


class EventType(str, Enum):
    REGISTRY_INITIALIZED = "registry.initialized"
    PARTICIPANT_REGISTERED = "participant.registered"
    PARTICIPANT_UPDATED = "participant.updated"
    PARTICIPANT_VERIFIED = "participant.verified"
    PARTICIPANT_REJECTED = "participant.rejected"
    LAND_ADDED = "land.added"
    LAND_VERIFIED = "land.verified"
    LAND_OWNERSHIP_TRANSFERRED = "land.ownership_transferred"
    REQUEST_CREATED = "request.created"
    REQUEST_APPROVED = "request.approved"
    REQUEST_PAID = "request.paid"
    FRACTION_FINALIZED = "fraction.finalized"

    @property
    def entity(self) -> str:
        """Entity part of the event type (``request`` for ``request.paid``)."""
        return self.value.split(".", 1)[0]


class EventSink(Protocol):
    """Destination for registry events."""

    def publish(self, event: Event) -> None: ...

    def write_batch(self, entity_type: str, records: list[Any]) -> None: ...

    def close(self) -> None: ...


def build_event(
    event_type: EventType,
    subject: str | int,
    payload: Any,
    event_time: datetime,
    source: str = DEFAULT_SOURCE,
    **metadata: Any,
) -> Event:
    """Wrap a record (or plain dict) in an event envelope.

    Parameters
    ----------
    event_type : EventType
        What happened.
    subject : str | int
        Identity or id of the affected entity.
    payload : Any
        Dataclass record or dict; serialized into ``data``.
    event_time : datetime
        When the mutation was committed.
    """
    return Event(
        event_id=uuid.uuid4().hex,
        event_type=event_type.value,
        event_time=event_time,
        source=source,
        subject=str(subject),
        data=to_dict(payload),
        metadata=dict(metadata),
    )
