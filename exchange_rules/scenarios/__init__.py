"""Scenarios for generating sample identification portfolios."""

from exchange_rules.scenarios.identification_portfolio import (
    IdentificationPortfolioScenario,
    PortfolioResult,
)

__all__ = ["IdentificationPortfolioScenario", "PortfolioResult"]
