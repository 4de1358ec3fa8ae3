"""Tests for the exception hierarchy."""

import pytest

from exchange_rules.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    ExchangeRulesError,
    InvalidEntityStateError,
    RecordNormalizationError,
    ReferentialIntegrityError,
    SinkError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            EntityNotFoundError,
            InvalidEntityStateError,
            RecordNormalizationError,
            ReferentialIntegrityError,
            SinkError,
            ValidationError,
        ],
    )
    def test_all_derive_from_base(self, exc_class: type) -> None:
        """Test every custom exception is an ExchangeRulesError."""
        assert issubclass(exc_class, ExchangeRulesError)

    def test_referential_integrity_is_not_found(self) -> None:
        """Test a broken reference is a kind of missing entity."""
        assert issubclass(ReferentialIntegrityError, EntityNotFoundError)

    def test_normalization_is_validation(self) -> None:
        """Test normalization failures can be caught as validation errors."""
        with pytest.raises(ValidationError):
            raise RecordNormalizationError("bad row")

    def test_message_preserved(self) -> None:
        """Test exception message is preserved."""
        exc = SinkError("Cannot write output")

        assert str(exc) == "Cannot write output"

    def test_catch_with_base(self) -> None:
        """Test catching derived exceptions with the base class."""
        with pytest.raises(ExchangeRulesError):
            raise InvalidEntityStateError("bad state")
