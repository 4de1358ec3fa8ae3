"""Identification workflow: mutate, reload, recompute, publish."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Protocol

from exchange_rules.config import RuleConfig
from exchange_rules.engine import can_add_property
from exchange_rules.models.base import Event
from exchange_rules.models.identification import (
    AdditionCheck,
    ExchangeRuleStatus,
    IdentificationChannel,
    IdentificationTarget,
    IdentifiedProperty,
    PropertyKind,
)
from exchange_rules.sinks.serialization import status_to_dict
from exchange_rules.store import IdentificationStore

logger = logging.getLogger(__name__)

EVENT_TYPE = "identification.evaluated"
EVENT_SOURCE = "exchange-rules"
DEFAULT_TOPIC = "exchange.identification-status"


class StatusSink(Protocol):
    def send(self, topic: str, record: Any, key: str | None = None) -> None: ...


class IdentificationService:
    """Applies identification mutations and returns the recomputed status.

    Every mutation is followed by a full reload of the target's
    identifications and a fresh evaluation; no previous status is patched.

    Parameters
    ----------
    store : IdentificationStore
        Data layer holding exchanges, parked files and identifications.
    sink : StatusSink | None
        Optional destination for ``identification.evaluated`` events.
    config : RuleConfig | None
        Advisory rule settings.
    topic : str
        Topic the events are sent to.
    """

    def __init__(
        self,
        store: IdentificationStore,
        sink: StatusSink | None = None,
        config: RuleConfig | None = None,
        topic: str = DEFAULT_TOPIC,
    ) -> None:
        self.store = store
        self.sink = sink
        self.config = config or RuleConfig()
        self.topic = topic

    def status(self, target: IdentificationTarget) -> ExchangeRuleStatus:
        """Current status without publishing."""
        return self.store.evaluate(target, config=self.config)

    def check_addition(
        self,
        target: IdentificationTarget,
        new_value: IdentifiedProperty | Decimal | int | float | str | None,
    ) -> AdditionCheck:
        """Would identifying one more property keep a safe harbor?"""
        return can_add_property(
            self.store.load(target),
            new_value,
            self.store.get_target_value(target),
            config=self.config,
        )

    def identify(
        self,
        target: IdentificationTarget,
        channel: IdentificationChannel,
        kind: PropertyKind,
        **fields: Any,
    ) -> tuple[IdentifiedProperty, ExchangeRuleStatus]:
        """Create an identification and return it with the new status."""
        prop = self.store.create_property(target, channel, kind, **fields)
        logger.info(
            "Identified %s property %s on %s %s",
            prop.property_kind.value,
            prop.property_id,
            target.kind.value,
            target.target_id,
        )
        return prop, self._refresh(target)

    def update(self, property_id: str, **fields: Any) -> ExchangeRuleStatus:
        """Update an identification's editable fields."""
        prop = self.store.update_property(property_id, **fields)
        return self._refresh(prop.target)

    def remove(self, property_id: str) -> ExchangeRuleStatus:
        """Delete an identification outright."""
        target = self.store.get_property(property_id).target
        self.store.delete_property(property_id)
        logger.info("Deleted identified property %s", property_id)
        return self._refresh(target)

    def add_improvement(
        self, property_id: str, description: str, value: Any
    ) -> ExchangeRuleStatus:
        """Record improvement work on an identification."""
        self.store.add_improvement(property_id, description, value)
        return self._refresh(self.store.get_property(property_id).target)

    def remove_improvement(self, improvement_id: str) -> ExchangeRuleStatus:
        """Delete an improvement."""
        owner = self.store.get_improvement_owner(improvement_id)
        self.store.delete_improvement(improvement_id)
        return self._refresh(self.store.get_property(owner).target)

    def _refresh(self, target: IdentificationTarget) -> ExchangeRuleStatus:
        status = self.store.evaluate(target, config=self.config)
        if status.violations:
            logger.warning(
                "%s %s violates identification rules: %s",
                target.kind.value,
                target.target_id,
                "; ".join(status.violations),
                extra={
                    "target_kind": target.kind.value,
                    "target_id": target.target_id,
                    "active_rule": status.active_rule.value,
                },
            )
        if self.sink is not None:
            self.sink.send(self.topic, self._event(target, status), key=target.target_id)
        return status

    def _event(self, target: IdentificationTarget, status: ExchangeRuleStatus) -> Event:
        return Event(
            event_id=str(uuid.uuid4()),
            event_type=EVENT_TYPE,
            event_time=datetime.now(timezone.utc),
            source=EVENT_SOURCE,
            subject=target.target_id,
            data=status_to_dict(status),
            metadata={"target_kind": target.kind.value},
        )
