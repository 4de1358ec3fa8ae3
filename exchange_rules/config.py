"""Configuration management for exchange-rules."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from exchange_rules.exceptions import ConfigurationError


@dataclass
class RuleConfig:
    """Advisory settings for the compliance evaluator.

    The safe-harbor thresholds themselves (3 properties, 200%, 95%) are
    fixed by the tax rules and are not configurable.
    """

    capacity_warning_ratio: Decimal = Decimal("0.90")
    currency_symbol: str = "$"

    def validate(self) -> None:
        """Raise ConfigurationError if the settings are unusable."""
        if not Decimal("0") < self.capacity_warning_ratio <= Decimal("1"):
            raise ConfigurationError(
                f"capacity_warning_ratio must be in (0, 1], got {self.capacity_warning_ratio}"
            )
        if not self.currency_symbol:
            raise ConfigurationError("currency_symbol must not be empty")


@dataclass
class KafkaConfig:
    """Kafka producer configuration for rule-status events."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 5
    retries: int = 3
    topic: str = "exchange.identification-status"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class ExchangeRulesConfig:
    """Main configuration for exchange-rules."""

    rules: RuleConfig = field(default_factory=RuleConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "ExchangeRulesConfig":
        """Create config from environment variables."""
        import os

        ratio_str = os.getenv("CAPACITY_WARNING_RATIO", "0.90")
        try:
            ratio = Decimal(ratio_str)
        except InvalidOperation as exc:
            raise ConfigurationError(
                f"CAPACITY_WARNING_RATIO is not a number: {ratio_str!r}"
            ) from exc

        rules = RuleConfig(
            capacity_warning_ratio=ratio,
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "$"),
        )
        rules.validate()

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic=os.getenv("STATUS_TOPIC", "exchange.identification-status"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as exc:
            raise ConfigurationError(f"SEED is not an integer: {seed_str!r}") from exc

        return cls(
            rules=rules,
            kafka=kafka,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
