"""Selection of the identification safe harbor."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from exchange_rules.engine.values import ZERO, clamp_money, total_value
from exchange_rules.models.identification import ExchangeRule, IdentifiedProperty

THREE_PROPERTY_LIMIT = 3
VALUE_CEILING_MULTIPLIER = Decimal("2")
ACQUISITION_RATIO = Decimal("0.95")


@dataclass
class RuleSelection:
    """Rule in force plus the aggregates it was chosen from."""

    active_rule: ExchangeRule
    total_identified_value: Decimal
    identified_count: int


def sale_reference(total_sale_value: Decimal | int | float | str | None) -> Decimal:
    """Relinquished value used by the rules; unknown or negative means zero."""
    return clamp_money(total_sale_value)


def value_ceiling(total_sale_value: Decimal) -> Decimal:
    """Maximum aggregate value allowed under the 200% rule."""
    return total_sale_value * VALUE_CEILING_MULTIPLIER


def select_rule(
    active: list[IdentifiedProperty],
    total_sale_value: Decimal | int | float | str | None,
) -> RuleSelection:
    """Pick the safe harbor for an active (non-cancelled) set.

    Precedence, first match wins:

    1. nothing identified -> ``NONE_IDENTIFIED``
    2. at most three properties -> ``THREE_PROPERTY`` with no value ceiling
    3. aggregate within 200% of the sale value -> ``TWO_HUNDRED_PERCENT``
    4. otherwise -> ``NINETY_FIVE_PERCENT``
    """
    if not active:
        return RuleSelection(ExchangeRule.NONE_IDENTIFIED, ZERO, 0)

    count = len(active)
    total = total_value(active)

    if count <= THREE_PROPERTY_LIMIT:
        rule = ExchangeRule.THREE_PROPERTY
    elif total <= value_ceiling(sale_reference(total_sale_value)):
        rule = ExchangeRule.TWO_HUNDRED_PERCENT
    else:
        rule = ExchangeRule.NINETY_FIVE_PERCENT

    return RuleSelection(rule, total, count)
