"""Custom exception hierarchy for exchange-rules."""


class ExchangeRulesError(Exception):
    """Base exception for all exchange-rules errors."""


class EntityNotFoundError(ExchangeRulesError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(ExchangeRulesError):
    """Raised when an entity is in an invalid state for the operation."""


class ValidationError(ExchangeRulesError):
    """Raised when input is rejected at entry time."""


class RecordNormalizationError(ValidationError):
    """Raised when a fetched record cannot be mapped to an identified property."""


class ConfigurationError(ExchangeRulesError):
    """Raised when configuration is invalid or missing."""


class SinkError(ExchangeRulesError):
    """Raised when a sink operation fails."""
