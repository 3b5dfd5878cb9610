"""Configuration management for land-registry."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from land_registry.exceptions import ConfigurationError
from land_registry.models.registry.enums import FractionPolicy


@dataclass
class RegistryConfig:
    """Core registry behaviour."""

    fraction_policy: FractionPolicy = FractionPolicy.RESERVED
    max_fractions: int = 100
    percentage_base: int = 100

    def __post_init__(self) -> None:
        if self.max_fractions < 1:
            raise ConfigurationError(f"max_fractions must be >= 1, got {self.max_fractions}")
        if self.percentage_base < 1:
            raise ConfigurationError(f"percentage_base must be >= 1, got {self.percentage_base}")
        if self.max_fractions > self.percentage_base:
            # Every fraction must be worth at least 1%
            raise ConfigurationError(
                f"max_fractions ({self.max_fractions}) must not exceed "
                f"percentage_base ({self.percentage_base})"
            )


@dataclass
class KafkaConfig:
    """Kafka producer configuration for the event feed."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "land-registry"

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
class ScenarioConfig:
    """Configuration for scenario execution."""

    name: str
    num_buyers: int = 10
    total_fractions: int = 10
    total_price: int = 1_000_000
    seed: int | None = None
    labels: dict[str, Any] = field(default_factory=dict)


@dataclass
class LandRegistryConfig:
    """Main configuration for land-registry."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scenario: ScenarioConfig | None = None
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "LandRegistryConfig":
        """Create config from environment variables."""
        import os

        policy_name = os.getenv("FRACTION_POLICY", FractionPolicy.RESERVED.value)
        try:
            policy = FractionPolicy(policy_name.upper())
        except ValueError as exc:
            raise ConfigurationError(f"Unknown FRACTION_POLICY: {policy_name}") from exc

        try:
            max_fractions = int(os.getenv("MAX_FRACTIONS", "100"))
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid integer setting: {exc}") from exc

        registry = RegistryConfig(
            fraction_policy=policy,
            max_fractions=max_fractions,
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic_prefix=os.getenv("TOPIC_PREFIX", "land-registry"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            registry=registry,
            kafka=kafka,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
