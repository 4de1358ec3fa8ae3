"""Compliance evaluation for a selected safe harbor."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from exchange_rules.config import RuleConfig
from exchange_rules.engine.classifier import acquired_set
from exchange_rules.engine.selector import ACQUISITION_RATIO, sale_reference, value_ceiling
from exchange_rules.engine.values import ZERO, format_money, total_value
from exchange_rules.models.identification import ExchangeRule, IdentifiedProperty

NO_PROPERTIES_WARNING = "No properties identified yet."
NINETY_FIVE_PERCENT_WARNING = (
    "The 95% rule is very restrictive. "
    "Consider reducing identified properties to comply with the 200% rule."
)


@dataclass
class Evaluation:
    """Compliance verdict for one evaluation run."""

    is_compliant: bool
    violations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    acquired_value: Decimal = ZERO


def evaluate(
    active: list[IdentifiedProperty],
    rule: ExchangeRule,
    total_sale_value: Decimal | int | float | str | None,
    total_identified_value: Decimal,
    *,
    config: RuleConfig | None = None,
) -> Evaluation:
    """Decide compliance and collect violations and warnings.

    Parameters
    ----------
    active : list[IdentifiedProperty]
        Non-cancelled identifications the rule was selected from.
    rule : ExchangeRule
        Rule returned by :func:`~exchange_rules.engine.selector.select_rule`.
    total_sale_value : Decimal | int | float | str | None
        Relinquished value; unknown counts as zero.
    total_identified_value : Decimal
        Aggregate effective value of ``active``.
    config : RuleConfig | None
        Advisory settings (warning ratio, currency symbol).

    Returns
    -------
    Evaluation
        Verdict. Boundaries are inclusive: exactly 200% or exactly 95%
        is compliant.
    """
    config = config or RuleConfig()
    symbol = config.currency_symbol
    sale = sale_reference(total_sale_value)
    acquired = total_value(acquired_set(active))

    if rule == ExchangeRule.NONE_IDENTIFIED:
        # Not started is neither compliant nor a breach.
        return Evaluation(
            is_compliant=False,
            warnings=[NO_PROPERTIES_WARNING],
            acquired_value=acquired,
        )

    if rule == ExchangeRule.THREE_PROPERTY:
        return Evaluation(is_compliant=True, acquired_value=acquired)

    if rule == ExchangeRule.TWO_HUNDRED_PERCENT:
        return Evaluation(
            is_compliant=True,
            warnings=_capacity_warnings(sale, total_identified_value, config),
            acquired_value=acquired,
        )

    if rule == ExchangeRule.NINETY_FIVE_PERCENT:
        required = total_identified_value * ACQUISITION_RATIO
        if acquired >= required:
            return Evaluation(
                is_compliant=True,
                warnings=[NINETY_FIVE_PERCENT_WARNING],
                acquired_value=acquired,
            )

        shortfall = required - acquired
        violation = (
            f"Total identified value ({format_money(total_identified_value, symbol)}) "
            f"across {len(active)} properties exceeds both the 3-property and 200% "
            f"safe harbors (200% limit {format_money(value_ceiling(sale), symbol)}). "
            f"Acquired value ({format_money(acquired, symbol)}) is "
            f"{format_money(shortfall, symbol)} short of the required 95% "
            f"({format_money(required, symbol)})."
        )
        return Evaluation(
            is_compliant=False,
            violations=[violation],
            warnings=[NINETY_FIVE_PERCENT_WARNING],
            acquired_value=acquired,
        )

    # COMPLIANT is a presentation label, never selected.
    return Evaluation(is_compliant=True, acquired_value=acquired)


def _capacity_warnings(sale: Decimal, total: Decimal, config: RuleConfig) -> list[str]:
    """Warn when the 200% ceiling is nearly used up."""
    ceiling = value_ceiling(sale)
    symbol = config.currency_symbol

    if ceiling == 0:
        return [
            "Relinquished property value is not set; the 200% limit is "
            f"{format_money(ZERO, symbol)}."
        ]

    if total < ceiling * config.capacity_warning_ratio:
        return []

    percent_used = (total / ceiling * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    remaining = ceiling - total
    return [
        f"You have used {percent_used}% of your 200% limit. "
        f"Only {format_money(remaining, symbol)} remaining."
    ]
