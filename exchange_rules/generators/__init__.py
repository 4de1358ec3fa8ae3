"""Sample-data generators."""

from exchange_rules.generators.identification import (
    ExchangeGenerator,
    IdentifiedPropertyGenerator,
)

__all__ = ["ExchangeGenerator", "IdentifiedPropertyGenerator"]
