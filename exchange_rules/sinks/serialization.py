"""Shared serialization utilities for sinks."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from exchange_rules.models.identification import ExchangeRuleStatus


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if isinstance(obj, ExchangeRuleStatus):
        return status_to_dict(obj)
    elif is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def status_to_dict(status: ExchangeRuleStatus) -> dict:
    """Serialize a rule status including its derived remaining capacity."""
    result = dataclass_to_dict(status)
    result["remaining_capacity"] = serialize_value(status.remaining_capacity)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    Decimals become strings so amounts survive the round trip exactly.
    """
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {_serialize_key(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def _serialize_key(key: Any) -> Any:
    return key.value if isinstance(key, Enum) else key
