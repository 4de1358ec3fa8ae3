"""Exchanges and parked files that identified properties are attached to."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from exchange_rules.models.identification.enums import TargetKind


@dataclass(frozen=True)
class IdentificationTarget:
    """Key of the exchange or EAT parked file owning a set of identifications."""

    kind: TargetKind
    target_id: str

    @classmethod
    def exchange(cls, exchange_id: str) -> "IdentificationTarget":
        return cls(TargetKind.EXCHANGE, exchange_id)

    @classmethod
    def parked_file(cls, parked_file_id: str) -> "IdentificationTarget":
        return cls(TargetKind.PARKED_FILE, parked_file_id)


@dataclass
class Exchange:
    """Forward exchange; the relinquished value is the sale reference."""

    exchange_id: str
    name: str
    relinquished_value: Decimal | None  # None until the sale value is known
    closing_date: date | None = None

    @property
    def target(self) -> IdentificationTarget:
        return IdentificationTarget.exchange(self.exchange_id)


@dataclass
class ParkedFile:
    """EAT parked file (reverse exchange)."""

    parked_file_id: str
    name: str
    relinquished_value: Decimal | None
    parked_date: date | None = None

    @property
    def target(self) -> IdentificationTarget:
        return IdentificationTarget.parked_file(self.parked_file_id)
