"""Tests for the rule indicator view-model."""

from decimal import Decimal

from exchange_rules.config import RuleConfig
from exchange_rules.models.identification import ExchangeRule, ExchangeRuleStatus
from exchange_rules.presentation import build_indicator, describe_rule


def _status(
    rule: ExchangeRule,
    *,
    compliant: bool = True,
    total: str = "0",
    sale: str = "100000",
    count: int = 0,
    violations: list[str] | None = None,
    warnings: list[str] | None = None,
) -> ExchangeRuleStatus:
    return ExchangeRuleStatus(
        active_rule=rule,
        is_compliant=compliant,
        total_identified_value=Decimal(total),
        total_sale_value=Decimal(sale),
        identified_count=count,
        violations=violations or [],
        warnings=warnings or [],
    )


class TestDescribeRule:
    """Tests for describe_rule."""

    def test_three_property(self) -> None:
        """Test the 3-property description."""
        desc = describe_rule(_status(ExchangeRule.THREE_PROPERTY, count=2))

        assert desc.title == "3 Property Rule"
        assert desc.limit == "Maximum: 3 properties"

    def test_two_hundred_percent(self) -> None:
        """Test the 200% limit line shows the ceiling."""
        desc = describe_rule(_status(ExchangeRule.TWO_HUNDRED_PERCENT, total="150000"))

        assert desc.title == "200% Rule"
        assert desc.limit == "Maximum Value: $200,000.00"

    def test_ninety_five_percent(self) -> None:
        """Test the 95% limit line shows the amount to acquire."""
        desc = describe_rule(_status(ExchangeRule.NINETY_FIVE_PERCENT, total="250000"))

        assert desc.title == "95% Rule"
        assert desc.limit == "Must Acquire: $237,500.00"

    def test_compliant_and_none(self) -> None:
        """Test titles of the label-only states."""
        assert describe_rule(_status(ExchangeRule.COMPLIANT)).title == "Compliant"
        none = describe_rule(_status(ExchangeRule.NONE_IDENTIFIED, compliant=False))
        assert none.title == "No Properties Identified"
        assert none.limit == ""

    def test_custom_symbol(self) -> None:
        """Test the configured currency symbol is used."""
        desc = describe_rule(
            _status(ExchangeRule.TWO_HUNDRED_PERCENT), RuleConfig(currency_symbol="US$")
        )

        assert desc.limit == "Maximum Value: US$200,000.00"


class TestBuildIndicator:
    """Tests for build_indicator."""

    def test_two_hundred_percent_panel(self) -> None:
        """Test remaining capacity is shown under the 200% rule."""
        panel = build_indicator(
            _status(ExchangeRule.TWO_HUNDRED_PERCENT, total="190000", count=5,
                    warnings=["nearly full"]),
            can_edit=True,
        )

        assert panel.tone == "warning"
        assert panel.show_compliant_badge is True
        assert panel.remaining_capacity == Decimal("10000")
        assert panel.total_identified_value == Decimal("190000")
        assert panel.warnings == ["nearly full"]
        assert panel.can_add is True

    def test_remaining_capacity_hidden_without_sale(self) -> None:
        """Test no capacity figure when the sale value is unknown."""
        panel = build_indicator(_status(ExchangeRule.TWO_HUNDRED_PERCENT, sale="0", count=4))

        assert panel.remaining_capacity is None

    def test_remaining_capacity_hidden_for_other_rules(self) -> None:
        """Test capacity is only shown under the 200% rule."""
        panel = build_indicator(_status(ExchangeRule.THREE_PROPERTY, total="50000", count=1))

        assert panel.remaining_capacity is None
        assert panel.tone == "info"

    def test_violation_hides_warnings_and_add(self) -> None:
        """Test violations take over the panel and block adding."""
        panel = build_indicator(
            _status(
                ExchangeRule.NINETY_FIVE_PERCENT,
                compliant=False,
                total="250000",
                count=5,
                violations=["short"],
                warnings=["ignored"],
            ),
            can_edit=True,
        )

        assert panel.tone == "violation"
        assert panel.show_compliant_badge is False
        assert panel.violations == ["short"]
        assert panel.warnings == []
        assert panel.can_add is False
        assert panel.can_edit is True

    def test_none_identified_panel(self) -> None:
        """Test the empty state hides the total and the badge."""
        panel = build_indicator(
            _status(ExchangeRule.NONE_IDENTIFIED, compliant=False, warnings=["none yet"])
        )

        assert panel.total_identified_value is None
        assert panel.show_compliant_badge is False
        assert panel.identified_count == 0

    def test_read_only_viewer(self) -> None:
        """Test users without edit capability never get the add action."""
        panel = build_indicator(_status(ExchangeRule.THREE_PROPERTY, count=1))

        assert panel.can_add is False
        assert panel.can_edit is False
