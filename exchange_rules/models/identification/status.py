"""Engine output models."""

from dataclasses import dataclass, field
from decimal import Decimal

from exchange_rules.models.identification.enums import ExchangeRule


@dataclass
class ExchangeRuleStatus:
    """Result of evaluating an identified set against the safe harbors."""

    active_rule: ExchangeRule
    is_compliant: bool
    total_identified_value: Decimal
    total_sale_value: Decimal
    identified_count: int
    violations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    acquired_value: Decimal = Decimal("0.00")

    @property
    def value_ceiling(self) -> Decimal:
        """200% of the relinquished value."""
        return self.total_sale_value * 2

    @property
    def remaining_capacity(self) -> Decimal | None:
        """Headroom under the 200% ceiling; only defined under that rule."""
        if self.active_rule != ExchangeRule.TWO_HUNDRED_PERCENT:
            return None
        return self.value_ceiling - self.total_identified_value


@dataclass
class AdditionCheck:
    """Advisory answer to "can another property be identified?"."""

    can_add: bool
    reason: str | None = None
