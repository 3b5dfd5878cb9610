"""Kafka sink for streaming registry events to Kafka topics."""

import json
import logging
import time
from dataclasses import dataclass, is_dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from land_registry.config import KafkaConfig
from land_registry.exceptions import SinkError
from land_registry.models.base import Event
from land_registry.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

# Configuration presets
RELIABLE = KafkaConfig(
    bootstrap_servers="localhost:9092",
    acks="all",
    batch_size=16384,
    linger_ms=5,
)

EVENT_BY_EVENT = KafkaConfig(
    bootstrap_servers="localhost:9092",
    acks="all",
    batch_size=1,
    linger_ms=0,
)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0

    @property
    def throughput(self) -> float:
        """Calculate events per second achieved."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        duration = self.end_time - self.start_time
        return self.sent / duration if duration > 0 else 0.0


class KafkaSink:
    """Publish registry events to one Kafka topic per entity.

    Events go to ``<topic_prefix>.<entity>`` (``land-registry.request`` for
    ``request.paid``) keyed by the event subject, so every event about the
    same land, request or identity lands in the same partition in order.
    """

    # Record export topic to key field mapping
    KEY_FIELDS = {
        "lands": "land_id",
        "requests": "request_id",
        "participants": "identity",
        "fractions": "land_id",
    }

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = self._create_producer()
        self.stats = ProducerStats()

    def _create_producer(self) -> Producer:
        """Create Kafka producer with configuration."""
        return Producer(self.config.to_dict())

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def topic_for(self, name: str) -> str:
        """Full topic name for an entity (``request``) or export (``lands``)."""
        return f"{self.config.topic_prefix}.{name}"

    def _get_key(self, entity_type: str, record: Any) -> str | None:
        """Extract message key from record based on entity type."""
        key_field = self.KEY_FIELDS.get(entity_type)
        if not key_field:
            return None

        if is_dataclass(record):
            value = getattr(record, key_field, None)
        elif isinstance(record, dict):
            value = record.get(key_field)
        else:
            value = None
        return str(value) if value is not None else None

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to Kafka topic."""
        if self.stats.start_time is None:
            self.stats.start_time = time.time()

        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")

        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=value,
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as exc:
            raise SinkError(f"Cannot queue message for {topic}: {exc}") from exc
        self.stats.sent += 1
        self.producer.poll(0)

    def publish(self, event: Event) -> None:
        """Send one event to its entity topic, keyed by subject."""
        entity = event.event_type.split(".", 1)[0]
        self.send(self.topic_for(entity), event, key=event.subject)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to the export topic of ``entity_type``."""
        topic = self.topic_for(entity_type)
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record, key=self._get_key(entity_type, record))

        self.flush()
        logger.info("Batch complete: sent=%d, delivered=%d, failed=%d",
                    self.stats.sent, self.stats.delivered, self.stats.failed)

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        self.stats.end_time = time.time()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
