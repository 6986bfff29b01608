from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from .geo import GeoPoint

StopTimeKind = Literal["arrival", "departure"]


@dataclass(frozen=True, slots=True)
class VehicleAnnotation:
    """Map marker for a vehicle; route_id doubles as the marker title."""

    vehicle_id: str
    lat: float
    lon: float
    bearing: float | None = None
    route_id: str | None = None
    trip_id: str | None = None


@dataclass(frozen=True, slots=True)
class StopAnnotation:
    stop_id: str
    description: str
    location: GeoPoint
    kind: StopTimeKind
    time_epoch_s: int

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.time_epoch_s, tz=timezone.utc)
