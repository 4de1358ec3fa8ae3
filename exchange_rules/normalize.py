"""Normalization of fetched identification rows into engine input.

Joined reads return nested relations either as a single object or as a
list depending on join depth, and the exchange and parked-file tables use
different foreign-key names. Everything is flattened here, once, so the
engine only ever sees :class:`IdentifiedProperty`.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Mapping, TypeVar

from exchange_rules.exceptions import RecordNormalizationError
from exchange_rules.models.identification import (
    IdentificationChannel,
    IdentificationStatus,
    IdentificationTarget,
    IdentifiedProperty,
    PropertyImprovement,
    PropertyKind,
    PropertyRef,
)

E = TypeVar("E", bound=Enum)

TARGET_KEYS = {
    "exchange_id": IdentificationTarget.exchange,
    "eat_parked_file_id": IdentificationTarget.parked_file,
}
IMPROVEMENT_PARENT_KEYS = ("identified_property_id", "eat_identified_property_id")


def normalize_records(rows: Iterable[Mapping[str, Any]] | None) -> list[IdentifiedProperty]:
    """Normalize every row of a loader result (``None`` means no rows)."""
    return [normalize_record(row) for row in rows or []]


def normalize_record(raw: Mapping[str, Any]) -> IdentifiedProperty:
    """Map one joined identification row to an :class:`IdentifiedProperty`.

    Raises
    ------
    RecordNormalizationError
        On a missing row or improvement id, unknown enum strings,
        unparseable numbers or dates, or a percentage outside 0-100.
    """
    if "id" not in raw or raw["id"] is None:
        raise RecordNormalizationError("Identified property row has no id")
    property_id = str(raw["id"])

    percentage = _decimal(raw.get("percentage"), "percentage", property_id)
    if percentage is not None and not Decimal("0") <= percentage <= Decimal("100"):
        raise RecordNormalizationError(
            f"Identified property {property_id}: percentage {percentage} is outside 0-100"
        )

    return IdentifiedProperty(
        property_id=property_id,
        identification_channel=_enum(
            IdentificationChannel, raw.get("identification_type"), "identification_type", property_id
        ),
        property_kind=_enum(PropertyKind, raw.get("property_type"), "property_type", property_id),
        base_value=_decimal(raw.get("value"), "value", property_id),
        status=_enum(
            IdentificationStatus,
            raw.get("status") or IdentificationStatus.IDENTIFIED.value,
            "status",
            property_id,
        ),
        identification_date=_date(raw.get("identification_date"), property_id),
        improvements=[
            _improvement(item, property_id) for item in _as_list(raw.get("improvements"))
        ],
        percentage=percentage,
        is_parked=bool(raw.get("is_parked", False)),
        target=_target(raw),
        property_ref=_property_ref(raw.get("property")),
        description=raw.get("description"),
        document_storage_path=raw.get("document_storage_path"),
        metadata=dict(raw.get("metadata") or {}),
        created_at=_datetime(raw.get("created_at"), property_id),
        updated_at=_datetime(raw.get("updated_at"), property_id),
        created_by=raw.get("created_by"),
    )


def _as_list(value: Any) -> list:
    """Collapse the object-or-list join shape into a list."""
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value]
    return list(value)


def _as_single(value: Any) -> Mapping[str, Any] | None:
    """Collapse the object-or-list join shape into one object."""
    items = _as_list(value)
    return items[0] if items else None


def _target(raw: Mapping[str, Any]) -> IdentificationTarget | None:
    for key, factory in TARGET_KEYS.items():
        if raw.get(key) is not None:
            return factory(str(raw[key]))
    return None


def _property_ref(value: Any) -> PropertyRef | None:
    joined = _as_single(value)
    if joined is None:
        return None
    return PropertyRef(property_id=str(joined.get("id")), address=joined.get("address") or "")


def _improvement(raw: Mapping[str, Any], property_id: str) -> PropertyImprovement:
    if raw.get("id") is None:
        raise RecordNormalizationError(
            f"Identified property {property_id}: improvement row has no id"
        )
    parent = next(
        (str(raw[key]) for key in IMPROVEMENT_PARENT_KEYS if raw.get(key) is not None),
        property_id,
    )
    value = _decimal(raw.get("value"), "improvement value", property_id)
    return PropertyImprovement(
        improvement_id=str(raw["id"]),
        identified_property_id=parent,
        description=raw.get("description") or "",
        value=value if value is not None else Decimal("0"),
        created_at=_datetime(raw.get("created_at"), property_id),
        updated_at=_datetime(raw.get("updated_at"), property_id),
    )


def _enum(enum_type: type[E], value: Any, field_name: str, property_id: str) -> E:
    if isinstance(value, enum_type):
        return value
    if value is None:
        raise RecordNormalizationError(f"Identified property {property_id}: {field_name} is missing")
    key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return enum_type(key)
    except ValueError as exc:
        raise RecordNormalizationError(
            f"Identified property {property_id}: unknown {field_name} {value!r}"
        ) from exc


def _decimal(value: Any, field_name: str, property_id: str) -> Decimal | None:
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value
    try:
        amount = Decimal(value) if isinstance(value, int) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise RecordNormalizationError(
            f"Identified property {property_id}: {field_name} {value!r} is not a number"
        ) from exc
    if not amount.is_finite():
        raise RecordNormalizationError(
            f"Identified property {property_id}: {field_name} {value!r} is not finite"
        )
    return amount


def _date(value: Any, property_id: str) -> date:
    if value is None or value == "":
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise RecordNormalizationError(
            f"Identified property {property_id}: identification_date {value!r} is not a date"
        ) from exc


def _datetime(value: Any, property_id: str) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as exc:
        raise RecordNormalizationError(
            f"Identified property {property_id}: timestamp {value!r} is not ISO formatted"
        ) from exc
