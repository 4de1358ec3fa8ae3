"""Entry points combining classification, rule selection and evaluation."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from exchange_rules.config import RuleConfig
from exchange_rules.engine.classifier import active_set
from exchange_rules.engine.evaluator import evaluate
from exchange_rules.engine.selector import (
    THREE_PROPERTY_LIMIT,
    sale_reference,
    select_rule,
    value_ceiling,
)
from exchange_rules.engine.values import clamp_money, effective_value, format_money, total_value
from exchange_rules.models.identification import (
    AdditionCheck,
    ExchangeRuleStatus,
    IdentifiedProperty,
)

logger = logging.getLogger(__name__)


def calculate_exchange_rule(
    properties: Iterable[IdentifiedProperty],
    total_sale_value: Decimal | int | float | str | None,
    *,
    config: RuleConfig | None = None,
) -> ExchangeRuleStatus:
    """Evaluate an identified set against the 1031 identification rules.

    Parameters
    ----------
    properties : Iterable[IdentifiedProperty]
        Every identification for one exchange or parked file, any channel,
        cancelled rows included (they are ignored).
    total_sale_value : Decimal | int | float | str | None
        Value of the relinquished property or properties.
    config : RuleConfig | None
        Advisory settings.

    Returns
    -------
    ExchangeRuleStatus
        Fresh status; nothing is retained between calls.
    """
    active = active_set(properties)
    sale = sale_reference(total_sale_value)
    selection = select_rule(active, sale)
    evaluation = evaluate(
        active,
        selection.active_rule,
        sale,
        selection.total_identified_value,
        config=config,
    )

    logger.debug(
        "Evaluated %d identified properties: rule=%s total=%s sale=%s compliant=%s",
        selection.identified_count,
        selection.active_rule.value,
        selection.total_identified_value,
        sale,
        evaluation.is_compliant,
    )

    return ExchangeRuleStatus(
        active_rule=selection.active_rule,
        is_compliant=evaluation.is_compliant,
        total_identified_value=selection.total_identified_value,
        total_sale_value=sale,
        identified_count=selection.identified_count,
        violations=evaluation.violations,
        warnings=evaluation.warnings,
        acquired_value=evaluation.acquired_value,
    )


def can_add_property(
    properties: Iterable[IdentifiedProperty],
    new_value: IdentifiedProperty | Decimal | int | float | str | None,
    total_sale_value: Decimal | int | float | str | None,
    *,
    config: RuleConfig | None = None,
) -> AdditionCheck:
    """Check whether identifying one more property stays within a safe harbor.

    Advisory only; callers decide whether to block the addition.
    """
    symbol = (config or RuleConfig()).currency_symbol
    active = active_set(properties)
    count = len(active)

    if isinstance(new_value, IdentifiedProperty):
        addition = effective_value(new_value)
    else:
        addition = clamp_money(new_value)

    new_total = total_value(active) + addition
    ceiling = value_ceiling(sale_reference(total_sale_value))

    if count < THREE_PROPERTY_LIMIT:
        return AdditionCheck(can_add=True)

    if count == THREE_PROPERTY_LIMIT:
        if new_total > ceiling:
            return AdditionCheck(
                can_add=False,
                reason=(
                    "Adding this property would exceed the 200% rule limit of "
                    f"{format_money(ceiling, symbol)}."
                ),
            )
        return AdditionCheck(
            can_add=True,
            reason="Adding a 4th property will activate the 200% rule.",
        )

    if new_total > ceiling:
        return AdditionCheck(
            can_add=False,
            reason=(
                "Adding this property would exceed the 200% rule limit. "
                "This would trigger the restrictive 95% rule."
            ),
        )
    return AdditionCheck(can_add=True)
