"""Tests for domain models."""

from datetime import date, datetime
from decimal import Decimal

from exchange_rules.models import Event
from exchange_rules.models.identification import (
    Exchange,
    ExchangeRule,
    ExchangeRuleStatus,
    IdentificationChannel,
    IdentificationStatus,
    IdentificationTarget,
    IdentifiedProperty,
    ParkedFile,
    PropertyKind,
    PropertyRef,
    TargetKind,
)


class TestEnums:
    """Tests for enum values."""

    def test_rule_values(self) -> None:
        """Test stable string values of the rules."""
        assert [r.value for r in ExchangeRule] == [
            "3_property",
            "200_percent",
            "95_percent",
            "compliant",
            "none",
        ]

    def test_str_enums(self) -> None:
        """Test enums compare equal to their string values."""
        assert IdentificationStatus.CANCELLED == "cancelled"
        assert IdentificationChannel("by_contract") is IdentificationChannel.BY_CONTRACT


class TestTargets:
    """Tests for exchanges, parked files and target keys."""

    def test_exchange_target(self) -> None:
        """Test an exchange exposes its target key."""
        exchange = Exchange(exchange_id="e-1", name="Smith", relinquished_value=Decimal("1"))

        assert exchange.target == IdentificationTarget(TargetKind.EXCHANGE, "e-1")

    def test_parked_file_target(self) -> None:
        """Test a parked file exposes its target key."""
        parked = ParkedFile(parked_file_id="p-1", name="EAT", relinquished_value=None)

        assert parked.target == IdentificationTarget.parked_file("p-1")

    def test_targets_are_hashable(self) -> None:
        """Test target keys can index dictionaries."""
        index = {IdentificationTarget.exchange("x"): 1}

        assert index[IdentificationTarget.exchange("x")] == 1
        assert IdentificationTarget.exchange("x") != IdentificationTarget.parked_file("x")


class TestIdentifiedProperty:
    """Tests for IdentifiedProperty."""

    def _prop(self, **kwargs) -> IdentifiedProperty:
        return IdentifiedProperty(
            property_id="ip-1",
            identification_channel=IdentificationChannel.WRITTEN_FORM,
            property_kind=PropertyKind.STANDARD_ADDRESS,
            base_value=Decimal("100"),
            status=IdentificationStatus.IDENTIFIED,
            identification_date=date(2026, 1, 1),
            **kwargs,
        )

    def test_defaults(self) -> None:
        """Test default field values."""
        prop = self._prop()

        assert prop.improvements == []
        assert prop.percentage is None
        assert prop.is_parked is False
        assert prop.metadata == {}

    def test_display_name(self) -> None:
        """Test the display name prefers the address."""
        ref = PropertyRef(property_id="r-1", address="5 Oak Ave")

        assert self._prop(property_ref=ref, description="ignored").display_name == "5 Oak Ave"
        assert self._prop(description="DST").display_name == "DST"
        assert self._prop().display_name == "No description"


class TestExchangeRuleStatus:
    """Tests for ExchangeRuleStatus derived values."""

    def test_remaining_capacity(self) -> None:
        """Test capacity is only defined under the 200% rule."""
        status = ExchangeRuleStatus(
            active_rule=ExchangeRule.TWO_HUNDRED_PERCENT,
            is_compliant=True,
            total_identified_value=Decimal("150.00"),
            total_sale_value=Decimal("100.00"),
            identified_count=4,
        )

        assert status.value_ceiling == Decimal("200.00")
        assert status.remaining_capacity == Decimal("50.00")

        status.active_rule = ExchangeRule.THREE_PROPERTY
        assert status.remaining_capacity is None


class TestEvent:
    """Tests for Event envelope."""

    def test_event_defaults(self) -> None:
        """Test metadata defaults to an empty dict."""
        event = Event(
            event_id="1",
            event_type="identification.evaluated",
            event_time=datetime(2026, 1, 1),
            source="exchange-rules",
            subject="e-1",
            data={},
        )

        assert event.metadata == {}
