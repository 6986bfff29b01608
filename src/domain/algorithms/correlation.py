from __future__ import annotations

from typing import Mapping

from src.domain.models import (
    FeedSnapshot,
    Stop,
    StopAnnotation,
    StopTimeUpdate,
    TripUpdate,
    VehicleAnnotation,
)
from src.domain.models.annotation import StopTimeKind


def annotations_for_all_vehicles(
    vehicle_feed: FeedSnapshot,
) -> tuple[VehicleAnnotation, ...]:
    """One annotation per entity carrying a vehicle position with a trip.

    Entities without a vehicle (alerts, bare trip updates) or whose vehicle
    has no trip descriptor are skipped.
    """

    out: list[VehicleAnnotation] = []
    for ent in vehicle_feed.entities:
        v = ent.vehicle
        if v is None or not v.has_trip:
            continue
        out.append(
            VehicleAnnotation(
                vehicle_id=v.vehicle_id,
                lat=v.lat,
                lon=v.lon,
                bearing=v.bearing,
                route_id=v.route_id,
                trip_id=v.trip_id,
            )
        )
    return tuple(out)


def trip_update_for_vehicle(
    vehicle_id: str, trip_update_feed: FeedSnapshot | None
) -> TripUpdate | None:
    """Return the trip update whose vehicle descriptor id equals vehicle_id.

    Uniqueness is not validated: if several entities match, the first one in
    snapshot order wins.
    """

    if trip_update_feed is None:
        return None

    for ent in trip_update_feed.entities:
        tu = ent.trip_update
        if tu is None or tu.vehicle_id is None:
            continue
        if tu.vehicle_id == vehicle_id:
            return tu
    return None


def _display_time(update: StopTimeUpdate) -> tuple[StopTimeKind, int] | None:
    # Arrival wins when both are present.
    if update.arrival_epoch_s is not None:
        return "arrival", update.arrival_epoch_s
    if update.departure_epoch_s is not None:
        return "departure", update.departure_epoch_s
    return None


def stop_annotations_for_trip(
    trip_update: TripUpdate, stops_by_id: Mapping[str, Stop]
) -> tuple[StopAnnotation, ...]:
    """Stop markers for a trip, in the feed's stop-time-update order.

    Updates referencing a stop missing from the table, or carrying neither
    an arrival nor a departure time, are skipped.
    """

    out: list[StopAnnotation] = []
    for update in trip_update.stop_time_updates:
        if update.stop_id is None:
            continue
        stop = stops_by_id.get(update.stop_id)
        if stop is None:
            continue
        shown = _display_time(update)
        if shown is None:
            continue
        kind, epoch_s = shown
        out.append(
            StopAnnotation(
                stop_id=stop.id,
                description=stop.name,
                location=stop.location,
                kind=kind,
                time_epoch_s=epoch_s,
            )
        )
    return tuple(out)
