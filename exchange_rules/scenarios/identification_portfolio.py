"""Identification portfolio scenario spread across the safe-harbor outcomes."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from decimal import Decimal

from exchange_rules.config import RuleConfig
from exchange_rules.generators import ExchangeGenerator, IdentifiedPropertyGenerator
from exchange_rules.models.identification import (
    ExchangeRule,
    ExchangeRuleStatus,
    IdentificationStatus,
    IdentificationTarget,
    IdentifiedProperty,
)
from exchange_rules.store import IdentificationStore

logger = logging.getLogger(__name__)

PROFILE_THREE_PROPERTY = "three_property"
PROFILE_TWO_HUNDRED = "two_hundred_percent"
PROFILE_NINETY_FIVE = "ninety_five_percent"


@dataclass
class PortfolioResult:
    """Store contents and the status computed for every target."""

    store: IdentificationStore
    statuses: dict[IdentificationTarget, ExchangeRuleStatus] = field(default_factory=dict)

    def rule_counts(self) -> dict[ExchangeRule, int]:
        """Number of targets per active rule."""
        counts: dict[ExchangeRule, int] = {}
        for status in self.statuses.values():
            counts[status.active_rule] = counts.get(status.active_rule, 0) + 1
        return counts

    def non_compliant(self) -> list[IdentificationTarget]:
        """Targets with at least one violation."""
        return [target for target, status in self.statuses.items() if status.violations]


class IdentificationPortfolioScenario:
    """Generate exchanges and parked files with replacement identifications.

    Each target is assigned one of three profiles:
        - three_property: 1-3 properties of any value
        - two_hundred_percent: 4-6 properties within 200% of the sale value
        - ninety_five_percent: 4-6 properties over 200%, some acquired

    Cancelled identifications are sprinkled in so the exclusion path is
    exercised.
    """

    PROFILES = [PROFILE_THREE_PROPERTY, PROFILE_TWO_HUNDRED, PROFILE_NINETY_FIVE]
    PROFILE_WEIGHTS = [0.50, 0.35, 0.15]

    def __init__(
        self,
        num_exchanges: int = 20,
        num_parked_files: int = 5,
        cancelled_rate: float = 0.10,
        seed: int | None = None,
        *,
        config: RuleConfig | None = None,
    ) -> None:
        """Initialize the scenario.

        Parameters
        ----------
        num_exchanges : int
            Number of forward exchanges.
        num_parked_files : int
            Number of EAT parked files.
        cancelled_rate : float
            Chance that a target also carries one cancelled identification.
        seed : int | None
            Random seed for reproducibility.
        config : RuleConfig | None
            Rule settings used when evaluating.
        """
        self.num_exchanges = num_exchanges
        self.num_parked_files = num_parked_files
        self.cancelled_rate = cancelled_rate
        self.seed = seed
        self.config = config

        self._random = random.Random(seed)
        self.store = IdentificationStore()
        self._exchange_gen = ExchangeGenerator(seed=seed)
        # Offset so property ids never repeat exchange ids
        self._property_gen = IdentifiedPropertyGenerator(
            seed=seed + 1 if seed is not None else None
        )

    def generate(self) -> PortfolioResult:
        """Generate all targets, identify properties and evaluate each target."""
        logger.info(
            "Starting identification portfolio scenario: %d exchanges, %d parked files",
            self.num_exchanges,
            self.num_parked_files,
        )

        targets: list[tuple[IdentificationTarget, Decimal]] = []
        for _ in range(self.num_exchanges):
            exchange = self._exchange_gen.generate()
            self.store.add_exchange(exchange)
            targets.append((exchange.target, exchange.relinquished_value))
        for _ in range(self.num_parked_files):
            parked_file = self._exchange_gen.generate_parked_file()
            self.store.add_parked_file(parked_file)
            targets.append((parked_file.target, parked_file.relinquished_value))

        result = PortfolioResult(store=self.store)
        for target, sale_value in targets:
            profile = self._random.choices(self.PROFILES, weights=self.PROFILE_WEIGHTS, k=1)[0]
            for prop in self._identify(target, sale_value, profile):
                self.store.add_property(prop)
            result.statuses[target] = self.store.evaluate(target, config=self.config)

        logger.info(
            "Generated %d identified properties; rules: %s",
            len(self.store.identified_properties),
            {rule.value: count for rule, count in result.rule_counts().items()},
        )
        return result

    def _identify(
        self,
        target: IdentificationTarget,
        sale_value: Decimal,
        profile: str,
    ) -> list[IdentifiedProperty]:
        if profile == PROFILE_THREE_PROPERTY:
            props = [
                self._property(target, self._random.uniform(0.3, 1.5) * float(sale_value))
                for _ in range(self._random.randint(1, 3))
            ]
        elif profile == PROFILE_TWO_HUNDRED:
            count = self._random.randint(4, 6)
            # Stay under the ceiling including worst-case improvements.
            share = float(sale_value) * 1.5 / count
            props = [self._property(target, share, improvements=False) for _ in range(count)]
        else:
            count = self._random.randint(4, 6)
            share = float(sale_value) * 3 / count
            props = [self._property(target, share, improvements=False) for _ in range(count)]
            for prop in props[: self._random.randint(0, count)]:
                prop.status = IdentificationStatus.ACQUIRED

        if self._random.random() < self.cancelled_rate:
            props.append(
                self._property(target, float(sale_value), status=IdentificationStatus.CANCELLED)
            )
        return props

    def _property(
        self,
        target: IdentificationTarget,
        value: float,
        status: IdentificationStatus | None = None,
        improvements: bool = True,
    ) -> IdentifiedProperty:
        if status is None:
            status = self._random.choice(
                [IdentificationStatus.IDENTIFIED, IdentificationStatus.UNDER_CONTRACT]
            )
        return self._property_gen.generate(
            target=target,
            value=Decimal(int(value // 1000) * 1000),
            status=status,
            max_improvements=2 if improvements else 0,
        )
