"""Identification data store with referential integrity."""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from exchange_rules.config import RuleConfig
from exchange_rules.engine import calculate_exchange_rule, to_money
from exchange_rules.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
    ValidationError,
)
from exchange_rules.models.identification import (
    Exchange,
    ExchangeRuleStatus,
    IdentificationChannel,
    IdentificationStatus,
    IdentificationTarget,
    IdentifiedProperty,
    ParkedFile,
    PropertyImprovement,
    PropertyKind,
    PropertyRef,
    TargetKind,
)

# update_property keyword -> IdentifiedProperty attribute
UPDATABLE_FIELDS = {
    "value": "base_value",
    "percentage": "percentage",
    "status": "status",
    "is_parked": "is_parked",
    "description": "description",
}


def _new_id() -> str:
    return str(uuid.uuid4())


def _entry_money(value: Any, field_name: str) -> Decimal | None:
    """Entry-time money check: absent is allowed, negative is not."""
    if value is None:
        return None
    amount = to_money(value)
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative, got {amount}")
    return amount


def _entry_percentage(value: Any) -> Decimal | None:
    if value is None:
        return None
    try:
        pct = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"percentage is not a number: {value!r}") from exc
    if not pct.is_finite() or not Decimal("0") <= pct <= Decimal("100"):
        raise ValidationError(f"percentage must be between 0 and 100, got {value}")
    return pct


@dataclass
class IdentificationStore:
    """In-memory store for exchanges, parked files and their identifications.

    Callers get snapshots back from :meth:`load` and :meth:`get_property`;
    mutating a snapshot never touches the stored record.
    """

    exchanges: dict[str, Exchange] = field(default_factory=dict)
    parked_files: dict[str, ParkedFile] = field(default_factory=dict)
    identified_properties: dict[str, IdentifiedProperty] = field(default_factory=dict)

    # Relationship indexes
    _target_properties: dict[IdentificationTarget, list[str]] = field(default_factory=dict)
    _improvement_owner: dict[str, str] = field(default_factory=dict)

    def add_exchange(self, exchange: Exchange) -> None:
        """Add an exchange to the store."""
        self.exchanges[exchange.exchange_id] = exchange
        self._target_properties.setdefault(exchange.target, [])

    def add_parked_file(self, parked_file: ParkedFile) -> None:
        """Add an EAT parked file to the store."""
        self.parked_files[parked_file.parked_file_id] = parked_file
        self._target_properties.setdefault(parked_file.target, [])

    def get_target_value(self, target: IdentificationTarget) -> Decimal | None:
        """Relinquished value of an exchange or parked file."""
        if target.kind == TargetKind.EXCHANGE:
            if target.target_id not in self.exchanges:
                raise EntityNotFoundError(f"Exchange {target.target_id} not found")
            return self.exchanges[target.target_id].relinquished_value
        if target.target_id not in self.parked_files:
            raise EntityNotFoundError(f"Parked file {target.target_id} not found")
        return self.parked_files[target.target_id].relinquished_value

    def create_property(
        self,
        target: IdentificationTarget,
        channel: IdentificationChannel,
        kind: PropertyKind,
        *,
        value: Any = None,
        percentage: Any = None,
        status: IdentificationStatus = IdentificationStatus.IDENTIFIED,
        description: str | None = None,
        property_ref: PropertyRef | None = None,
        identification_date: date | None = None,
        is_parked: bool = False,
        document_storage_path: str | None = None,
        metadata: dict | None = None,
        created_by: str | None = None,
    ) -> IdentifiedProperty:
        """Identify a replacement property against an exchange or parked file."""
        if target not in self._target_properties:
            raise ReferentialIntegrityError(f"{target.kind.value} {target.target_id} not found")

        if kind == PropertyKind.STANDARD_ADDRESS and property_ref is None:
            raise InvalidEntityStateError("A standard address identification needs a property")
        if kind != PropertyKind.STANDARD_ADDRESS and not (description or "").strip():
            raise InvalidEntityStateError(f"A {kind.value} identification needs a description")

        now = datetime.now()
        prop = IdentifiedProperty(
            property_id=_new_id(),
            identification_channel=IdentificationChannel(channel),
            property_kind=PropertyKind(kind),
            base_value=_entry_money(value, "value"),
            status=IdentificationStatus(status),
            identification_date=identification_date or now.date(),
            percentage=_entry_percentage(percentage),
            is_parked=is_parked,
            target=target,
            property_ref=property_ref,
            description=description,
            document_storage_path=document_storage_path,
            metadata=dict(metadata or {}),
            created_at=now,
            updated_at=now,
            created_by=created_by,
        )
        self.identified_properties[prop.property_id] = prop
        self._target_properties[target].append(prop.property_id)
        return copy.deepcopy(prop)

    def add_property(self, prop: IdentifiedProperty) -> None:
        """Add an existing identification record (e.g. a normalized row)."""
        if prop.target is None:
            raise InvalidEntityStateError(f"Identified property {prop.property_id} has no target")
        if prop.target not in self._target_properties:
            raise ReferentialIntegrityError(
                f"{prop.target.kind.value} {prop.target.target_id} not found"
            )
        if prop.property_id in self.identified_properties:
            raise InvalidEntityStateError(f"Identified property {prop.property_id} already exists")

        stored = copy.deepcopy(prop)
        if stored.created_at is None:
            stored.created_at = datetime.now()
        self.identified_properties[stored.property_id] = stored
        self._target_properties[stored.target].append(stored.property_id)
        for improvement in stored.improvements:
            improvement.identified_property_id = stored.property_id
            self._improvement_owner[improvement.improvement_id] = stored.property_id

    def update_property(self, property_id: str, **fields: Any) -> IdentifiedProperty:
        """Update value, percentage, status, parked flag or description."""
        prop = self._require_property(property_id)

        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        for name, raw in fields.items():
            if name == "value":
                changes[name] = _entry_money(raw, "value")
            elif name == "percentage":
                changes[name] = _entry_percentage(raw)
            elif name == "status":
                try:
                    changes[name] = IdentificationStatus(raw)
                except ValueError as exc:
                    raise ValidationError(f"Unknown status {raw!r}") from exc
            elif name == "is_parked":
                changes[name] = bool(raw)
            else:
                changes[name] = raw

        for name, converted in changes.items():
            setattr(prop, UPDATABLE_FIELDS[name], converted)
        prop.updated_at = datetime.now()
        return copy.deepcopy(prop)

    def delete_property(self, property_id: str) -> None:
        """Delete an identified property and its improvements."""
        prop = self._require_property(property_id)
        for improvement in prop.improvements:
            self._improvement_owner.pop(improvement.improvement_id, None)
        self._target_properties[prop.target].remove(property_id)
        del self.identified_properties[property_id]

    def add_improvement(
        self,
        property_id: str,
        description: str,
        value: Any,
    ) -> PropertyImprovement:
        """Record improvement work on an identified property."""
        prop = self._require_property(property_id)
        if not (description or "").strip():
            raise ValidationError("Improvement description is required")
        amount = _entry_money(value, "improvement value")
        if amount is None:
            raise ValidationError("Improvement value is required")

        now = datetime.now()
        improvement = PropertyImprovement(
            improvement_id=_new_id(),
            identified_property_id=property_id,
            description=description,
            value=amount,
            created_at=now,
            updated_at=now,
        )
        prop.improvements.append(improvement)
        prop.updated_at = now
        self._improvement_owner[improvement.improvement_id] = property_id
        return copy.deepcopy(improvement)

    def update_improvement(
        self,
        improvement_id: str,
        *,
        description: str | None = None,
        value: Any = None,
    ) -> PropertyImprovement:
        """Change an improvement's description and/or value."""
        improvement = self._require_improvement(improvement_id)
        if description is not None and not description.strip():
            raise ValidationError("Improvement description is required")
        amount = _entry_money(value, "improvement value") if value is not None else None

        if description is not None:
            improvement.description = description
        if amount is not None:
            improvement.value = amount
        improvement.updated_at = datetime.now()
        return copy.deepcopy(improvement)

    def delete_improvement(self, improvement_id: str) -> None:
        """Remove an improvement from its property."""
        improvement = self._require_improvement(improvement_id)
        prop = self.identified_properties[improvement.identified_property_id]
        prop.improvements = [
            imp for imp in prop.improvements if imp.improvement_id != improvement_id
        ]
        prop.updated_at = datetime.now()
        del self._improvement_owner[improvement_id]

    # Query methods
    def get_property(self, property_id: str) -> IdentifiedProperty:
        """Snapshot of one identified property."""
        return copy.deepcopy(self._require_property(property_id))

    def load(self, target: IdentificationTarget) -> list[IdentifiedProperty]:
        """Snapshot of every identification for a target, newest first."""
        if target not in self._target_properties:
            raise EntityNotFoundError(f"{target.kind.value} {target.target_id} not found")
        rows = [
            copy.deepcopy(self.identified_properties[pid])
            for pid in self._target_properties[target]
        ]
        rows.sort(key=lambda p: p.identification_date, reverse=True)
        return rows

    def evaluate(
        self,
        target: IdentificationTarget,
        *,
        config: RuleConfig | None = None,
    ) -> ExchangeRuleStatus:
        """Reload the target's identifications and recompute its rule status."""
        return calculate_exchange_rule(
            self.load(target),
            self.get_target_value(target),
            config=config,
        )

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "exchanges": len(self.exchanges),
            "parked_files": len(self.parked_files),
            "identified_properties": len(self.identified_properties),
            "improvements": len(self._improvement_owner),
        }

    def get_improvement_owner(self, improvement_id: str) -> str:
        """Id of the identified property an improvement belongs to."""
        return self._require_improvement(improvement_id).identified_property_id

    def _require_property(self, property_id: str) -> IdentifiedProperty:
        if property_id not in self.identified_properties:
            raise EntityNotFoundError(f"Identified property {property_id} not found")
        return self.identified_properties[property_id]

    def _require_improvement(self, improvement_id: str) -> PropertyImprovement:
        if improvement_id not in self._improvement_owner:
            raise EntityNotFoundError(f"Improvement {improvement_id} not found")
        prop = self.identified_properties[self._improvement_owner[improvement_id]]
        return next(imp for imp in prop.improvements if imp.improvement_id == improvement_id)
