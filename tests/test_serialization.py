"""Tests for sink serialization helpers."""

from datetime import date, datetime
from decimal import Decimal

from exchange_rules.models.identification import (
    ExchangeRule,
    ExchangeRuleStatus,
    IdentificationChannel,
    IdentificationStatus,
    IdentificationTarget,
    IdentifiedProperty,
    PropertyKind,
)
from exchange_rules.sinks.serialization import (
    dataclass_to_dict,
    serialize_value,
    status_to_dict,
    to_dict,
)


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_decimal_as_string(self) -> None:
        """Test decimals keep their exact digits."""
        assert serialize_value(Decimal("1234.50")) == "1234.50"

    def test_enum(self) -> None:
        """Test enums serialize to their value."""
        assert serialize_value(ExchangeRule.NINETY_FIVE_PERCENT) == "95_percent"

    def test_dates(self) -> None:
        """Test dates and datetimes use ISO format."""
        assert serialize_value(date(2026, 1, 2)) == "2026-01-02"
        assert serialize_value(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05"

    def test_nested(self) -> None:
        """Test containers are serialized recursively, including enum keys."""
        value = {ExchangeRule.THREE_PROPERTY: [Decimal("1"), (Decimal("2"),)]}

        assert serialize_value(value) == {"3_property": ["1", ["2"]]}

    def test_passthrough(self) -> None:
        """Test plain values are untouched."""
        assert serialize_value(3) == 3
        assert serialize_value(None) is None


class TestToDict:
    """Tests for to_dict and friends."""

    def test_status_includes_remaining_capacity(self) -> None:
        """Test the derived capacity is part of the serialized status."""
        status = ExchangeRuleStatus(
            active_rule=ExchangeRule.TWO_HUNDRED_PERCENT,
            is_compliant=True,
            total_identified_value=Decimal("150000.00"),
            total_sale_value=Decimal("100000.00"),
            identified_count=4,
        )

        data = to_dict(status)

        assert data == status_to_dict(status)
        assert data["active_rule"] == "200_percent"
        assert data["remaining_capacity"] == "50000.00"
        assert data["acquired_value"] == "0.00"
        assert data["violations"] == []

    def test_status_capacity_none_outside_two_hundred(self) -> None:
        """Test capacity serializes as null for other rules."""
        status = ExchangeRuleStatus(
            active_rule=ExchangeRule.NONE_IDENTIFIED,
            is_compliant=False,
            total_identified_value=Decimal("0.00"),
            total_sale_value=Decimal("0.00"),
            identified_count=0,
        )

        assert status_to_dict(status)["remaining_capacity"] is None

    def test_property_dataclass(self) -> None:
        """Test nested dataclasses and enums in an identified property."""
        prop = IdentifiedProperty(
            property_id="ip-1",
            identification_channel=IdentificationChannel.WRITTEN_FORM,
            property_kind=PropertyKind.DST,
            base_value=Decimal("10.00"),
            status=IdentificationStatus.IDENTIFIED,
            identification_date=date(2026, 5, 1),
            target=IdentificationTarget.exchange("e-1"),
            description="DST",
        )

        data = dataclass_to_dict(prop)

        assert data["target"] == {"kind": "exchange", "target_id": "e-1"}
        assert data["identification_date"] == "2026-05-01"
        assert data["property_kind"] == "dst"

    def test_dict_passthrough(self) -> None:
        """Test dicts are returned as-is."""
        record = {"id": 1}

        assert to_dict(record) is record

    def test_other_object(self) -> None:
        """Test other objects are wrapped as strings."""
        assert to_dict(42) == {"value": "42"}
