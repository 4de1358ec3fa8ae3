"""Identification domain models."""

from exchange_rules.models.identification.enums import (
    ExchangeRule,
    IdentificationChannel,
    IdentificationStatus,
    PropertyKind,
    TargetKind,
)
from exchange_rules.models.identification.property import (
    IdentifiedProperty,
    PropertyImprovement,
    PropertyRef,
)
from exchange_rules.models.identification.status import AdditionCheck, ExchangeRuleStatus
from exchange_rules.models.identification.target import (
    Exchange,
    IdentificationTarget,
    ParkedFile,
)

__all__ = [
    "AdditionCheck",
    "Exchange",
    "ExchangeRule",
    "ExchangeRuleStatus",
    "IdentificationChannel",
    "IdentificationStatus",
    "IdentificationTarget",
    "IdentifiedProperty",
    "ParkedFile",
    "PropertyImprovement",
    "PropertyKind",
    "PropertyRef",
    "TargetKind",
]
