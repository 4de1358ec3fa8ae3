"""Presentation helpers for rule status consumers."""

from exchange_rules.engine.values import format_money
from exchange_rules.presentation.indicator import (
    IndicatorPanel,
    RuleDescription,
    build_indicator,
    describe_rule,
)

__all__ = ["IndicatorPanel", "RuleDescription", "build_indicator", "describe_rule", "format_money"]
