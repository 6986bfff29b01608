from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class FeedType(str, Enum):
    VEHICLE_POSITIONS = "vehicle_positions"
    TRIP_UPDATES = "trip_updates"


@dataclass(frozen=True, slots=True)
class VehiclePosition:
    vehicle_id: str
    lat: float
    lon: float
    bearing: float | None = None
    route_id: str | None = None
    trip_id: str | None = None
    has_trip: bool = False

    def __post_init__(self) -> None:
        if not self.vehicle_id:
            raise ValueError("VehiclePosition requires a non-empty vehicle_id")


@dataclass(frozen=True, slots=True)
class StopTimeUpdate:
    """Revised arrival/departure estimate for one stop of a trip.

    Times are POSIX seconds. Either, both or neither may be present.
    """

    stop_id: str | None
    arrival_epoch_s: int | None = None
    departure_epoch_s: int | None = None
    stop_sequence: int | None = None


@dataclass(frozen=True, slots=True)
class TripUpdate:
    vehicle_id: str | None
    stop_time_updates: tuple[StopTimeUpdate, ...] = ()
    trip_id: str | None = None
    route_id: str | None = None


@dataclass(frozen=True, slots=True)
class FeedEntity:
    id: str
    vehicle: VehiclePosition | None = None
    trip_update: TripUpdate | None = None


@dataclass(frozen=True, slots=True)
class FeedSnapshot:
    """One decoded GTFS-Realtime feed message.

    Immutable so a store can swap whole snapshots without readers ever
    observing a mix of entities from two loads.
    """

    entities: tuple[FeedEntity, ...] = ()
    timestamp: datetime | None = None
