"""In-memory data stores for identified replacement properties."""

from exchange_rules.store.identification import IdentificationStore

__all__ = ["IdentificationStore"]
