"""Configuration management for loan-ledger."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loan_ledger.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for loan-ledger."""

    require_known_customer: bool = True
    seed_demo_customers: bool = False
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    topic_prefix: str = "dev.lending"
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"log_format must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}"
            )

    @classmethod
    def from_env(cls) -> LedgerConfig:
        """Create config from environment variables."""
        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=_env_flag("PRETTY_JSON", False),
        )

        seed = os.getenv("SEED")
        try:
            seed_value = int(seed) if seed else None
        except ValueError as e:
            raise ConfigurationError(f"SEED must be an integer, got {seed!r}") from e

        return cls(
            require_known_customer=_env_flag("REQUIRE_KNOWN_CUSTOMER", True),
            seed_demo_customers=_env_flag("SEED_DEMO_CUSTOMERS", False),
            kafka=kafka,
            output=output,
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.lending"),
            seed=seed_value,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")
