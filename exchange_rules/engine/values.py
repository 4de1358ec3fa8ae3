"""Decimal-safe money handling and per-property value aggregation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from exchange_rules.exceptions import ValidationError
from exchange_rules.models.identification import IdentifiedProperty

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Decimal | int | float | str | None) -> Decimal:
    """Convert a raw amount to a Decimal quantized to cents.

    Floats are routed through ``str`` so binary representation error never
    reaches the sum. ``None`` means "not entered" and becomes zero.

    Raises
    ------
    ValidationError
        If the value is not a number.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"Not a monetary amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"Not a finite monetary amount: {value!r}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError(f"Monetary amount out of range: {value!r}") from exc


def clamp_money(value: Decimal | int | float | str | None) -> Decimal:
    """Like :func:`to_money` but never below zero and never raising.

    Anything :func:`to_money` rejects (garbage, NaN, infinity, amounts too
    large to quantize) counts as zero.
    """
    try:
        amount = to_money(value)
    except ValidationError:
        return ZERO
    return max(ZERO, amount)


def improvements_value(prop: IdentifiedProperty) -> Decimal:
    """Sum of the property's improvement values, each clamped at zero."""
    return sum((clamp_money(imp.value) for imp in prop.improvements), ZERO)


def effective_value(prop: IdentifiedProperty) -> Decimal:
    """Base identified value plus all improvements.

    Negative terms count as zero so one malformed record cannot pull the
    aggregate down.
    """
    return clamp_money(prop.base_value) + improvements_value(prop)


def total_value(properties: Iterable[IdentifiedProperty]) -> Decimal:
    """Sum of effective values."""
    return sum((effective_value(p) for p in properties), ZERO)


def format_money(amount: Decimal, symbol: str = "$") -> str:
    """Render an amount as ``$1,234.56`` (``-$12.00`` when negative)."""
    quantized = to_money(amount)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol}{abs(quantized):,.2f}"
