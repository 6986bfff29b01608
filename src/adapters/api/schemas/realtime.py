from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from src.adapters.api.schemas.geo import GeoPointSchema


class StopSchema(BaseModel):
    stop_id: str
    name: str
    location: GeoPointSchema


class VehicleSchema(BaseModel):
    vehicle_id: str
    lat: float
    lon: float
    bearing: float | None = None
    route_id: str | None = None
    trip_id: str | None = None


class VehiclesResponseSchema(BaseModel):
    feed_timestamp: datetime | None = None
    vehicles: list[VehicleSchema]


class StopTimeUpdateSchema(BaseModel):
    stop_id: str | None = None
    stop_sequence: int | None = None
    arrival_epoch_s: int | None = None
    departure_epoch_s: int | None = None


class TripUpdateSchema(BaseModel):
    vehicle_id: str | None = None
    trip_id: str | None = None
    route_id: str | None = None
    stop_time_updates: list[StopTimeUpdateSchema]


class StopAnnotationSchema(BaseModel):
    stop_id: str
    description: str
    location: GeoPointSchema
    kind: Literal["arrival", "departure"]
    time_epoch_s: int
    time: datetime
