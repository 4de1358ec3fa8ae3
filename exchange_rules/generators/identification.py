"""Generators for exchanges, parked files and identified properties."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from exchange_rules.generators.base import BaseGenerator
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


class ExchangeGenerator(BaseGenerator):
    """Generate forward exchanges and EAT parked files."""

    # Relinquished values in thousands of dollars
    VALUE_RANGE = (250, 5000)

    def generate(self) -> Exchange:
        """Generate an exchange with a known relinquished value."""
        return Exchange(
            exchange_id=self.fake.uuid4(),
            name=f"{self.fake.last_name()} 1031 Exchange",
            relinquished_value=self._relinquished_value(),
            closing_date=self.fake.date_between(start_date="-45d", end_date="today"),
        )

    def generate_parked_file(self) -> ParkedFile:
        """Generate a reverse-exchange parked file."""
        return ParkedFile(
            parked_file_id=self.fake.uuid4(),
            name=f"EAT {self.fake.company()} Holdings LLC",
            relinquished_value=self._relinquished_value(),
            parked_date=self.fake.date_between(start_date="-180d", end_date="today"),
        )

    def _relinquished_value(self) -> Decimal:
        return Decimal(self.random.randint(*self.VALUE_RANGE) * 1000)


class IdentifiedPropertyGenerator(BaseGenerator):
    """Generate identified replacement properties."""

    PROPERTY_KINDS = list(PropertyKind)
    KIND_WEIGHTS = [0.70, 0.20, 0.10]

    STATUSES = [
        IdentificationStatus.IDENTIFIED,
        IdentificationStatus.UNDER_CONTRACT,
        IdentificationStatus.ACQUIRED,
        IdentificationStatus.CANCELLED,
    ]
    STATUS_WEIGHTS = [0.50, 0.20, 0.20, 0.10]

    IMPROVEMENT_WORK = [
        "Roof replacement",
        "Parking lot resurfacing",
        "HVAC upgrade",
        "Tenant build-out",
        "Facade renovation",
        "ADA accessibility work",
    ]

    def generate(
        self,
        target: IdentificationTarget | None = None,
        value: Decimal | None = None,
        status: IdentificationStatus | None = None,
        kind: PropertyKind | None = None,
        max_improvements: int = 2,
    ) -> IdentifiedProperty:
        """Generate a single identified property.

        Parameters
        ----------
        target : IdentificationTarget | None
            Exchange or parked file the property is identified against.
        value : Decimal | None
            Base value; random between $100k and $2M when omitted.
        status : IdentificationStatus | None
            Status; drawn from ``STATUS_WEIGHTS`` when omitted.
        kind : PropertyKind | None
            Property kind; drawn from ``KIND_WEIGHTS`` when omitted.
        max_improvements : int
            Upper bound on generated improvements.

        Returns
        -------
        IdentifiedProperty
            Generated property.
        """
        kind = kind or self.random.choices(self.PROPERTY_KINDS, weights=self.KIND_WEIGHTS, k=1)[0]
        status = status or self.random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]
        property_id = self.fake.uuid4()

        property_ref = None
        description = None
        percentage = None
        if kind == PropertyKind.STANDARD_ADDRESS:
            property_ref = PropertyRef(
                property_id=self.fake.uuid4(),
                address=self.fake.address().replace("\n", ", "),
            )
        elif kind == PropertyKind.DST:
            description = f"{self.fake.company()} Delaware Statutory Trust"
            percentage = Decimal(self.random.choice([10, 25, 50, 100]))
        else:
            description = f"100% membership interest in {self.fake.company()} LLC"
            percentage = Decimal("100")

        improvements = [
            self.generate_improvement(property_id)
            for _ in range(self.random.randint(0, max_improvements))
        ]

        return IdentifiedProperty(
            property_id=property_id,
            identification_channel=self.random.choice(list(IdentificationChannel)),
            property_kind=kind,
            base_value=value if value is not None else self._value(100, 2000),
            status=status,
            identification_date=date.today() - timedelta(days=self.random.randint(0, 44)),
            improvements=improvements,
            percentage=percentage,
            is_parked=target is not None and self.random.random() < 0.2,
            target=target,
            property_ref=property_ref,
            description=description,
        )

    def generate_batch(self, count: int, **kwargs) -> Iterator[IdentifiedProperty]:
        """Generate multiple identified properties.

        Parameters
        ----------
        count : int
            Number of properties to generate.
        **kwargs
            Passed to :meth:`generate`.

        Yields
        ------
        IdentifiedProperty
            Generated properties.
        """
        for _ in range(count):
            yield self.generate(**kwargs)

    def generate_improvement(self, property_id: str) -> PropertyImprovement:
        """Generate an improvement worth $5k-$250k."""
        return PropertyImprovement(
            improvement_id=self.fake.uuid4(),
            identified_property_id=property_id,
            description=self.random.choice(self.IMPROVEMENT_WORK),
            value=self._value(5, 250),
        )

    def _value(self, low_thousands: int, high_thousands: int) -> Decimal:
        return Decimal(self.random.randint(low_thousands, high_thousands) * 1000)
