"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal
from typing import Callable

import pytest

from exchange_rules.models.identification import (
    Exchange,
    IdentificationChannel,
    IdentificationStatus,
    IdentificationTarget,
    IdentifiedProperty,
    ParkedFile,
    PropertyImprovement,
    PropertyKind,
    PropertyRef,
)
from exchange_rules.store import IdentificationStore

PropertyFactory = Callable[..., IdentifiedProperty]


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sale_value() -> Decimal:
    """Relinquished value used by most rule tests."""
    return Decimal("1000000")


@pytest.fixture
def exchange_target() -> IdentificationTarget:
    """Target key of the sample exchange."""
    return IdentificationTarget.exchange("exch-test-001")


@pytest.fixture
def parked_target() -> IdentificationTarget:
    """Target key of the sample parked file."""
    return IdentificationTarget.parked_file("park-test-001")


@pytest.fixture
def make_property(exchange_target: IdentificationTarget) -> PropertyFactory:
    """Factory for identified properties with sensible defaults."""
    counter = {"n": 0}

    def _make(
        value: Decimal | int | str | None = 100000,
        status: IdentificationStatus = IdentificationStatus.IDENTIFIED,
        channel: IdentificationChannel = IdentificationChannel.WRITTEN_FORM,
        improvements: list[Decimal | int | str] | None = None,
        identification_date: date = date(2026, 1, 15),
        property_id: str | None = None,
    ) -> IdentifiedProperty:
        counter["n"] += 1
        pid = property_id or f"prop-{counter['n']:03d}"
        return IdentifiedProperty(
            property_id=pid,
            identification_channel=channel,
            property_kind=PropertyKind.STANDARD_ADDRESS,
            base_value=None if value is None else Decimal(str(value)),
            status=status,
            identification_date=identification_date,
            improvements=[
                PropertyImprovement(
                    improvement_id=f"{pid}-imp-{i}",
                    identified_property_id=pid,
                    description="Roof replacement",
                    value=Decimal(str(amount)),
                )
                for i, amount in enumerate(improvements or [])
            ],
            target=exchange_target,
            property_ref=PropertyRef(property_id=f"real-{pid}", address="100 Main St, Austin, TX"),
        )

    return _make


@pytest.fixture
def store(sale_value: Decimal) -> IdentificationStore:
    """Store holding one exchange and one parked file."""
    store = IdentificationStore()
    store.add_exchange(
        Exchange(exchange_id="exch-test-001", name="Test Exchange", relinquished_value=sale_value)
    )
    store.add_parked_file(
        ParkedFile(parked_file_id="park-test-001", name="Test EAT", relinquished_value=sale_value)
    )
    return store


@pytest.fixture
def sample_ref() -> PropertyRef:
    """Real property referenced by standard-address identifications."""
    return PropertyRef(property_id="real-001", address="200 Congress Ave, Austin, TX")
