"""Output sinks for rule statuses and status events."""

from exchange_rules.sinks.console import ConsoleSink
from exchange_rules.sinks.json_file import JsonFileSink
from exchange_rules.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
