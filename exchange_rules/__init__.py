"""Replacement-property identification and 1031 rule-compliance engine."""

from exchange_rules.engine import (
    active_set,
    calculate_exchange_rule,
    can_add_property,
    effective_value,
    evaluate,
    partition_by_channel,
    select_rule,
)
from exchange_rules.models.identification import (
    AdditionCheck,
    Exchange,
    ExchangeRule,
    ExchangeRuleStatus,
    IdentificationChannel,
    IdentificationStatus,
    IdentificationTarget,
    IdentifiedProperty,
    ParkedFile,
    PropertyImprovement,
    PropertyKind,
    PropertyRef,
)
from exchange_rules.normalize import normalize_record, normalize_records

__all__ = [
    "AdditionCheck",
    "Exchange",
    "ExchangeRule",
    "ExchangeRuleStatus",
    "IdentificationChannel",
    "IdentificationStatus",
    "IdentificationTarget",
    "IdentifiedProperty",
    "ParkedFile",
    "PropertyImprovement",
    "PropertyKind",
    "PropertyRef",
    "active_set",
    "calculate_exchange_rule",
    "can_add_property",
    "effective_value",
    "evaluate",
    "normalize_record",
    "normalize_records",
    "partition_by_channel",
    "select_rule",
]
