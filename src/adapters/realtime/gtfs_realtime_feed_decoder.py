from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from google.protobuf.message import DecodeError
from google.transit import gtfs_realtime_pb2

from src.app.ports.output import IFeedDecoder
from src.domain.exceptions import FeedDecodeError
from src.domain.models.realtime import (
    FeedEntity,
    FeedSnapshot,
    StopTimeUpdate,
    TripUpdate,
    VehiclePosition,
)


@dataclass(slots=True)
class GtfsRealtimeFeedDecoder(IFeedDecoder):
    """Decodes GTFS-Realtime FeedMessage protobuf bytes.

    Works for both VehiclePositions and TripUpdates feeds; each entity keeps
    whichever of the two payloads it carries.

    Notes:
      - Vehicle ids come only from the vehicle descriptor; entity ids are a
        separate namespace.
      - Vehicle payloads without a descriptor id or a position are dropped
        from their entity.
    """

    def decode(self, raw: bytes) -> FeedSnapshot:
        feed = gtfs_realtime_pb2.FeedMessage()
        try:
            feed.ParseFromString(raw)
        except DecodeError as exc:
            raise FeedDecodeError(f"Invalid GTFS-Realtime feed: {exc}") from exc

        timestamp = None
        if feed.header.HasField("timestamp") and int(feed.header.timestamp) > 0:
            timestamp = datetime.fromtimestamp(
                int(feed.header.timestamp), tz=timezone.utc
            )

        entities = tuple(_convert_entity(ent) for ent in feed.entity)
        return FeedSnapshot(entities=entities, timestamp=timestamp)


def _convert_entity(ent) -> FeedEntity:
    vehicle = None
    if ent.HasField("vehicle"):
        vehicle = _convert_vehicle(ent.vehicle)

    trip_update = None
    if ent.HasField("trip_update"):
        trip_update = _convert_trip_update(ent.trip_update)

    return FeedEntity(id=ent.id, vehicle=vehicle, trip_update=trip_update)


def _convert_vehicle(v) -> VehiclePosition | None:
    if not v.HasField("position"):
        return None

    vehicle_id = None
    if v.HasField("vehicle"):
        vehicle_id = v.vehicle.id or None
    if vehicle_id is None:
        return None

    pos = v.position
    bearing = float(pos.bearing) if pos.HasField("bearing") else None

    trip_id = None
    route_id = None
    has_trip = v.HasField("trip")
    if has_trip:
        trip_id = v.trip.trip_id or None
        route_id = v.trip.route_id or None

    return VehiclePosition(
        vehicle_id=vehicle_id,
        lat=float(pos.latitude),
        lon=float(pos.longitude),
        bearing=bearing,
        route_id=route_id,
        trip_id=trip_id,
        has_trip=has_trip,
    )


def _convert_trip_update(tu) -> TripUpdate:
    vehicle_id = None
    if tu.HasField("vehicle") and tu.vehicle.HasField("id"):
        vehicle_id = tu.vehicle.id

    updates: list[StopTimeUpdate] = []
    for stu in tu.stop_time_update:
        arrival = None
        if stu.HasField("arrival") and stu.arrival.HasField("time"):
            arrival = int(stu.arrival.time)
        departure = None
        if stu.HasField("departure") and stu.departure.HasField("time"):
            departure = int(stu.departure.time)

        updates.append(
            StopTimeUpdate(
                stop_id=stu.stop_id or None,
                arrival_epoch_s=arrival,
                departure_epoch_s=departure,
                stop_sequence=(
                    int(stu.stop_sequence) if stu.HasField("stop_sequence") else None
                ),
            )
        )

    return TripUpdate(
        vehicle_id=vehicle_id,
        stop_time_updates=tuple(updates),
        trip_id=tu.trip.trip_id or None,
        route_id=tu.trip.route_id or None,
    )
