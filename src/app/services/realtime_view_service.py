from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime

from src.app.ports.output import IStopTableRepository
from src.app.services.feed_store import FeedStore
from src.domain.algorithms.correlation import (
    annotations_for_all_vehicles,
    stop_annotations_for_trip,
    trip_update_for_vehicle,
)
from src.domain.algorithms.stop_table import index_stops
from src.domain.models import Stop, StopAnnotation, TripUpdate, VehicleAnnotation
from src.domain.models.realtime import FeedType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RealtimeViewService:
    """Supports the realtime map view.

    - Lists bus markers from the current vehicle positions feed.
    - Resolves a vehicle's trip update from the current trip updates feed.
    - Turns that trip update into stop markers using the static stop table.

    The stop table is loaded once, on first use.
    """

    stop_repository: IStopTableRepository
    feed_store: FeedStore

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _stops: tuple[Stop, ...] | None = field(default=None, init=False, repr=False)
    _stops_by_id: dict[str, Stop] = field(default_factory=dict, init=False, repr=False)

    def _ensure_stops(self) -> dict[str, Stop]:
        with self._lock:
            if self._stops is None:
                stops = self.stop_repository.load_stops()
                self._stops_by_id = index_stops(stops)
                self._stops = stops
                logger.info("Loaded stop table (%d stops)", len(stops))
            return self._stops_by_id

    def stops(self) -> tuple[Stop, ...]:
        self._ensure_stops()
        return self._stops or ()

    def vehicle_view(
        self, *, route_ids: set[str] | None = None
    ) -> tuple[datetime | None, tuple[VehicleAnnotation, ...]]:
        """Feed timestamp and markers, both taken from one snapshot read."""

        feed = self.feed_store.current_snapshot(FeedType.VEHICLE_POSITIONS)
        if feed is None:
            return None, ()

        annotations = annotations_for_all_vehicles(feed)
        if route_ids:
            annotations = tuple(
                a for a in annotations if a.route_id and a.route_id in route_ids
            )
        return feed.timestamp, annotations

    def vehicle_annotations(
        self, *, route_ids: set[str] | None = None
    ) -> tuple[VehicleAnnotation, ...]:
        _, annotations = self.vehicle_view(route_ids=route_ids)
        return annotations

    def trip_update_for_vehicle(self, vehicle_id: str) -> TripUpdate | None:
        feed = self.feed_store.current_snapshot(FeedType.TRIP_UPDATES)
        return trip_update_for_vehicle(vehicle_id, feed)

    def stop_annotations_for_vehicle(
        self, vehicle_id: str
    ) -> tuple[StopAnnotation, ...]:
        trip_update = self.trip_update_for_vehicle(vehicle_id)
        if trip_update is None:
            return ()
        return stop_annotations_for_trip(trip_update, self._ensure_stops())
