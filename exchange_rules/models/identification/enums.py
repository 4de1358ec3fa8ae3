"""Enumeration types for the identification domain."""

from enum import Enum


class IdentificationChannel(str, Enum):
    WRITTEN_FORM = "written_form"
    BY_CONTRACT = "by_contract"


class PropertyKind(str, Enum):
    STANDARD_ADDRESS = "standard_address"
    DST = "dst"
    MEMBERSHIP_INTEREST = "membership_interest"


class IdentificationStatus(str, Enum):
    IDENTIFIED = "identified"
    UNDER_CONTRACT = "under_contract"
    ACQUIRED = "acquired"
    CANCELLED = "cancelled"


class ExchangeRule(str, Enum):
    """Identification safe harbor in force for an evaluation.

    ``COMPLIANT`` is reserved for presenters; the selector never assigns it.
    """

    THREE_PROPERTY = "3_property"
    TWO_HUNDRED_PERCENT = "200_percent"
    NINETY_FIVE_PERCENT = "95_percent"
    COMPLIANT = "compliant"
    NONE_IDENTIFIED = "none"


class TargetKind(str, Enum):
    EXCHANGE = "exchange"
    PARKED_FILE = "parked_file"
