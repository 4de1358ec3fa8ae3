"""Replacement-property identification rule engine."""

from exchange_rules.engine.calculator import calculate_exchange_rule, can_add_property
from exchange_rules.engine.classifier import acquired_set, active_set, partition_by_channel
from exchange_rules.engine.evaluator import Evaluation, evaluate
from exchange_rules.engine.selector import (
    ACQUISITION_RATIO,
    THREE_PROPERTY_LIMIT,
    VALUE_CEILING_MULTIPLIER,
    RuleSelection,
    select_rule,
)
from exchange_rules.engine.values import (
    clamp_money,
    effective_value,
    format_money,
    improvements_value,
    to_money,
    total_value,
)

__all__ = [
    "ACQUISITION_RATIO",
    "Evaluation",
    "RuleSelection",
    "THREE_PROPERTY_LIMIT",
    "VALUE_CEILING_MULTIPLIER",
    "acquired_set",
    "active_set",
    "calculate_exchange_rule",
    "can_add_property",
    "clamp_money",
    "effective_value",
    "evaluate",
    "format_money",
    "improvements_value",
    "partition_by_channel",
    "select_rule",
    "to_money",
    "total_value",
]
