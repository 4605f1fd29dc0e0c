"""Kafka sink for publishing ledger records and events."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, is_dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from loan_ledger.config import KafkaConfig
from loan_ledger.exceptions import SinkError
from loan_ledger.models import Event
from loan_ledger.serialization import to_dict

logger = logging.getLogger(__name__)

DEFAULT_TOPIC_PREFIX = "dev.lending"
EVENTS_TOPIC = "events"


@dataclass
class ProducerConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str
    acks: str = "all"  # "0", "1", "all"
    batch_size: int = 16384  # bytes
    linger_ms: int = 5  # ms to wait for batching
    compression: str = "snappy"  # none, gzip, snappy, lz4
    retries: int = 3

    @classmethod
    def from_kafka_config(cls, config: KafkaConfig) -> ProducerConfig:
        return cls(
            bootstrap_servers=config.bootstrap_servers,
            acks=config.acks,
            batch_size=config.batch_size,
            linger_ms=config.linger_ms,
            compression=config.compression,
            retries=config.retries,
        )


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Publish ledger records and events to Kafka topics.

    Topics are ``<prefix>.<entity_type>`` for batches and
    ``<prefix>.events`` for ledger events. Payments and loan events are
    keyed by loan id so one loan's history stays in one partition, in order.
    """

    # Entity type to key field mapping
    KEY_FIELDS = {
        "customers": "customer_id",
        "loans": "loan_id",
        "payments": "loan_id",
    }

    def __init__(
        self,
        config: ProducerConfig | KafkaConfig | str,
        topic_prefix: str = DEFAULT_TOPIC_PREFIX,
    ) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : ProducerConfig | KafkaConfig | str
            Producer configuration or bootstrap servers string.
        topic_prefix : str
            Prefix prepended to every topic name.
        """
        if isinstance(config, str):
            config = ProducerConfig(bootstrap_servers=config)
        elif isinstance(config, KafkaConfig):
            config = ProducerConfig.from_kafka_config(config)

        self.config = config
        self.topic_prefix = topic_prefix
        self.producer = self._create_producer()
        self.stats = ProducerStats()

    def _create_producer(self) -> Producer:
        """Create Kafka producer with configuration."""
        try:
            return Producer(
                {
                    "bootstrap.servers": self.config.bootstrap_servers,
                    "acks": self.config.acks,
                    "retries": self.config.retries,
                    "linger.ms": self.config.linger_ms,
                    "batch.size": self.config.batch_size,
                    "compression.type": self.config.compression,
                }
            )
        except KafkaException as e:
            raise SinkError(f"Cannot create Kafka producer: {e}") from e

    def topic(self, entity_type: str) -> str:
        return f"{self.topic_prefix}.{entity_type}"

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def _get_key(self, entity_type: str, record: Any) -> str | None:
        """Extract message key from record based on entity type."""
        key_field = self.KEY_FIELDS.get(entity_type)
        if not key_field:
            return None

        if is_dataclass(record):
            return getattr(record, key_field, None)
        elif isinstance(record, dict):
            return record.get(key_field)
        return None

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to a Kafka topic as JSON."""
        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")

        self.producer.produce(
            topic=topic,
            key=key.encode("utf-8") if key else None,
            value=value,
            callback=self._delivery_callback,
        )
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to ``<prefix>.<entity_type>``."""
        topic = self.topic(entity_type)
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record, key=self._get_key(entity_type, record))

        self.flush()
        logger.info("Batch complete: sent=%d, delivered=%d, failed=%d",
                    self.stats.sent, self.stats.delivered, self.stats.failed)

    def publish_event(self, event: Event) -> None:
        """Send a ledger event; usable as a ``Ledger.subscribe`` listener."""
        key = event.data.get("loan_id") or event.subject
        self.send(self.topic(EVENTS_TOPIC), event, key=key)

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        remaining = self.producer.flush(timeout)
        if remaining:
            logger.warning("%d messages still queued after flush", remaining)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
