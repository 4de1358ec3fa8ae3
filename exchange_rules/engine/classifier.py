"""Filtering and grouping of identified properties."""

from __future__ import annotations

from typing import Iterable

from exchange_rules.models.identification import (
    IdentificationChannel,
    IdentificationStatus,
    IdentifiedProperty,
)


def active_set(properties: Iterable[IdentifiedProperty]) -> list[IdentifiedProperty]:
    """Drop cancelled identifications; both channels are kept."""
    return [p for p in properties if p.status != IdentificationStatus.CANCELLED]


def acquired_set(properties: Iterable[IdentifiedProperty]) -> list[IdentifiedProperty]:
    """Properties actually acquired (the 95% rule test)."""
    return [p for p in properties if p.status == IdentificationStatus.ACQUIRED]


def partition_by_channel(
    properties: Iterable[IdentifiedProperty],
) -> dict[IdentificationChannel, list[IdentifiedProperty]]:
    """Group properties for display, newest identification first.

    Cancelled rows are kept so they can still be listed. Both channels are
    always present in the result.
    """
    groups: dict[IdentificationChannel, list[IdentifiedProperty]] = {
        channel: [] for channel in IdentificationChannel
    }
    for prop in properties:
        groups[prop.identification_channel].append(prop)
    for rows in groups.values():
        rows.sort(key=lambda p: (p.identification_date, p.property_id), reverse=True)
    return groups
