from __future__ import annotations

from datetime import datetime, timezone

import pytest
from google.transit import gtfs_realtime_pb2

from src.adapters.realtime.gtfs_realtime_feed_decoder import GtfsRealtimeFeedDecoder
from src.domain.algorithms.correlation import (
    annotations_for_all_vehicles,
    trip_update_for_vehicle,
)
from src.domain.exceptions import FeedDecodeError


def _feed() -> gtfs_realtime_pb2.FeedMessage:
    feed = gtfs_realtime_pb2.FeedMessage()
    feed.header.gtfs_realtime_version = "2.0"
    feed.header.timestamp = 1_700_000_000
    return feed


def test_decode_vehicle_positions() -> None:
    feed = _feed()
    ent = feed.entity.add()
    ent.id = "1"
    ent.vehicle.vehicle.id = "V1"
    ent.vehicle.position.latitude = 39.0
    ent.vehicle.position.longitude = -105.0
    ent.vehicle.position.bearing = 90.0
    ent.vehicle.trip.trip_id = "T1"
    ent.vehicle.trip.route_id = "15"

    alert = feed.entity.add()
    alert.id = "alert-1"
    alert.alert.header_text.translation.add().text = "Detour"

    snapshot = GtfsRealtimeFeedDecoder().decode(feed.SerializeToString())

    assert snapshot.timestamp == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
    assert [e.id for e in snapshot.entities] == ["1", "alert-1"]

    v = snapshot.entities[0].vehicle
    assert v is not None
    assert v.vehicle_id == "V1"
    assert v.lat == pytest.approx(39.0)
    assert v.lon == pytest.approx(-105.0)
    assert v.bearing == pytest.approx(90.0)
    assert (v.route_id, v.trip_id, v.has_trip) == ("15", "T1", True)

    assert snapshot.entities[1].vehicle is None
    assert snapshot.entities[1].trip_update is None


def test_decode_vehicle_optional_fields_map_to_none() -> None:
    feed = _feed()
    ent = feed.entity.add()
    ent.id = "1"
    ent.vehicle.vehicle.id = "V1"
    ent.vehicle.position.latitude = 39.5
    ent.vehicle.position.longitude = -104.5

    snapshot = GtfsRealtimeFeedDecoder().decode(feed.SerializeToString())

    v = snapshot.entities[0].vehicle
    assert v is not None
    assert v.bearing is None
    assert v.has_trip is False
    assert v.trip_id is None


def test_decode_drops_vehicle_without_descriptor_id() -> None:
    feed = _feed()
    ent = feed.entity.add()
    ent.id = "4021"
    ent.vehicle.position.latitude = 39.5
    ent.vehicle.position.longitude = -104.5
    ent.vehicle.trip.trip_id = "T-A"

    snapshot = GtfsRealtimeFeedDecoder().decode(feed.SerializeToString())

    assert snapshot.entities[0].id == "4021"
    assert snapshot.entities[0].vehicle is None


def test_entity_id_is_not_used_to_correlate_trip_updates() -> None:
    vehicles = _feed()
    ent = vehicles.entity.add()
    ent.id = "7"
    ent.vehicle.position.latitude = 39.5
    ent.vehicle.position.longitude = -104.5
    ent.vehicle.trip.trip_id = "T-A"

    trips = _feed()
    ent = trips.entity.add()
    ent.id = "tu1"
    ent.trip_update.trip.trip_id = "T-B"
    ent.trip_update.vehicle.id = "7"

    decoder = GtfsRealtimeFeedDecoder()
    vehicle_feed = decoder.decode(vehicles.SerializeToString())
    trip_feed = decoder.decode(trips.SerializeToString())

    # Entity "7" is not vehicle "7": no marker, so nothing picks up T-B.
    assert annotations_for_all_vehicles(vehicle_feed) == ()
    assert [
        trip_update_for_vehicle(a.vehicle_id, trip_feed)
        for a in annotations_for_all_vehicles(vehicle_feed)
    ] == []


def test_decode_drops_vehicle_without_position() -> None:
    feed = _feed()
    ent = feed.entity.add()
    ent.id = "1"
    ent.vehicle.vehicle.id = "V1"

    snapshot = GtfsRealtimeFeedDecoder().decode(feed.SerializeToString())

    assert snapshot.entities[0].vehicle is None


def test_decode_trip_updates() -> None:
    feed = _feed()
    ent = feed.entity.add()
    ent.id = "tu1"
    ent.trip_update.trip.trip_id = "T1"
    ent.trip_update.trip.route_id = "15"
    ent.trip_update.vehicle.id = "V1"

    stu = ent.trip_update.stop_time_update.add()
    stu.stop_id = "S1"
    stu.stop_sequence = 3
    stu.arrival.time = 1000
    stu.departure.time = 1060

    stu = ent.trip_update.stop_time_update.add()
    stu.stop_id = "S2"
    stu.departure.time = 1200

    stu = ent.trip_update.stop_time_update.add()
    stu.stop_id = "S3"
    stu.arrival.delay = 30

    snapshot = GtfsRealtimeFeedDecoder().decode(feed.SerializeToString())

    tu = snapshot.entities[0].trip_update
    assert tu is not None
    assert (tu.vehicle_id, tu.trip_id, tu.route_id) == ("V1", "T1", "15")
    assert [
        (u.stop_id, u.stop_sequence, u.arrival_epoch_s, u.departure_epoch_s)
        for u in tu.stop_time_updates
    ] == [
        ("S1", 3, 1000, 1060),
        ("S2", None, None, 1200),
        ("S3", None, None, None),
    ]


def test_decode_trip_update_without_vehicle_descriptor() -> None:
    feed = _feed()
    ent = feed.entity.add()
    ent.id = "tu1"
    ent.trip_update.trip.trip_id = "T1"

    snapshot = GtfsRealtimeFeedDecoder().decode(feed.SerializeToString())

    tu = snapshot.entities[0].trip_update
    assert tu is not None
    assert tu.vehicle_id is None
    assert tu.stop_time_updates == ()


def test_decode_rejects_garbage() -> None:
    with pytest.raises(FeedDecodeError):
        GtfsRealtimeFeedDecoder().decode(b"\xff\xff\xff\xff")
