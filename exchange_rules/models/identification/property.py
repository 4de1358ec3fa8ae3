"""Identified replacement property models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from exchange_rules.models.identification.enums import (
    IdentificationChannel,
    IdentificationStatus,
    PropertyKind,
)
from exchange_rules.models.identification.target import IdentificationTarget


@dataclass
class PropertyImprovement:
    """Construction or improvement work added to an identified property."""

    improvement_id: str
    identified_property_id: str
    description: str
    value: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class PropertyRef:
    """Real property record a standard-address identification points at."""

    property_id: str
    address: str


@dataclass
class IdentifiedProperty:
    """Replacement property identified against an exchange or parked file.

    Only ``base_value``, ``improvements`` and ``status`` take part in rule
    math. ``percentage`` records the fractional interest being identified
    and does not scale the value.
    """

    property_id: str
    identification_channel: IdentificationChannel
    property_kind: PropertyKind
    base_value: Decimal | None
    status: IdentificationStatus
    identification_date: date
    improvements: list[PropertyImprovement] = field(default_factory=list)
    percentage: Decimal | None = None  # 0-100
    is_parked: bool = False
    target: IdentificationTarget | None = None
    property_ref: PropertyRef | None = None
    description: str | None = None
    document_storage_path: str | None = None
    metadata: dict = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None

    @property
    def display_name(self) -> str:
        """Address for standard identifications, free text otherwise."""
        if self.property_ref is not None:
            return self.property_ref.address
        return self.description or "No description"
