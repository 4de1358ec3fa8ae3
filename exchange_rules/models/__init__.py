"""Domain models for replacement-property identification."""

from exchange_rules.models.base import Event

__all__ = ["Event"]
