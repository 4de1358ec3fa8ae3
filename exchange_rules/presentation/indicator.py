"""View-model for the identification rule indicator panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from exchange_rules.config import RuleConfig
from exchange_rules.engine.selector import ACQUISITION_RATIO, THREE_PROPERTY_LIMIT
from exchange_rules.engine.values import format_money
from exchange_rules.models.identification import ExchangeRule, ExchangeRuleStatus

TONE_VIOLATION = "violation"
TONE_WARNING = "warning"
TONE_INFO = "info"


@dataclass
class RuleDescription:
    """Title, explanation and limit line for the active rule."""

    title: str
    description: str
    limit: str = ""


@dataclass
class IndicatorPanel:
    """Everything a UI needs to render the rule status banner."""

    rule: RuleDescription
    tone: str
    show_compliant_badge: bool
    identified_count: int
    total_identified_value: Decimal | None  # None hides the figure
    remaining_capacity: Decimal | None
    violations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    can_add: bool = False
    can_edit: bool = False


def describe_rule(status: ExchangeRuleStatus, config: RuleConfig | None = None) -> RuleDescription:
    """Human description of the rule in force."""
    symbol = (config or RuleConfig()).currency_symbol
    rule = status.active_rule

    if rule == ExchangeRule.THREE_PROPERTY:
        return RuleDescription(
            title="3 Property Rule",
            description="You may identify up to 3 replacement properties of any value.",
            limit=f"Maximum: {THREE_PROPERTY_LIMIT} properties",
        )
    if rule == ExchangeRule.TWO_HUNDRED_PERCENT:
        return RuleDescription(
            title="200% Rule",
            description=(
                "You may identify any number of properties, but their total value cannot "
                "exceed 200% of the relinquished property value."
            ),
            limit=f"Maximum Value: {format_money(status.value_ceiling, symbol)}",
        )
    if rule == ExchangeRule.NINETY_FIVE_PERCENT:
        return RuleDescription(
            title="95% Rule",
            description=(
                "You have exceeded the 200% limit. You must acquire at least 95% of the "
                "total identified property value."
            ),
            limit=(
                "Must Acquire: "
                f"{format_money(status.total_identified_value * ACQUISITION_RATIO, symbol)}"
            ),
        )
    if rule == ExchangeRule.COMPLIANT:
        return RuleDescription(
            title="Compliant",
            description="Your identification is compliant with IRS rules.",
        )
    return RuleDescription(
        title="No Properties Identified",
        description="Start by identifying replacement properties within 45 days of closing.",
    )


def build_indicator(
    status: ExchangeRuleStatus,
    *,
    can_edit: bool = False,
    config: RuleConfig | None = None,
) -> IndicatorPanel:
    """Build the indicator view-model for a status.

    ``can_edit`` is the caller's role capability (admin vs. not); it gates
    the add action together with the absence of violations.
    """
    has_violations = bool(status.violations)
    if has_violations:
        tone = TONE_VIOLATION
    elif status.warnings:
        tone = TONE_WARNING
    else:
        tone = TONE_INFO

    remaining = None
    if status.total_sale_value > 0 and status.active_rule == ExchangeRule.TWO_HUNDRED_PERCENT:
        remaining = status.remaining_capacity

    return IndicatorPanel(
        rule=describe_rule(status, config),
        tone=tone,
        show_compliant_badge=status.is_compliant and not has_violations,
        identified_count=status.identified_count,
        total_identified_value=(
            status.total_identified_value if status.total_identified_value > 0 else None
        ),
        remaining_capacity=remaining,
        violations=list(status.violations),
        warnings=[] if has_violations else list(status.warnings),
        can_add=can_edit and not has_violations,
        can_edit=can_edit,
    )
