from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """Static stop record; `name` holds the stop table's description column."""

    id: str
    name: str
    location: GeoPoint
