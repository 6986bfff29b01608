from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_realtime_view_service
from src.adapters.api.schemas.geo import GeoPointSchema
from src.adapters.api.schemas.realtime import (
    StopAnnotationSchema,
    StopSchema,
    StopTimeUpdateSchema,
    TripUpdateSchema,
    VehicleSchema,
    VehiclesResponseSchema,
)
from src.app.services.realtime_view_service import RealtimeViewService

router = APIRouter(prefix="/realtime", tags=["realtime"])


@router.get("/stops", response_model=list[StopSchema])
def list_stops(
    service: RealtimeViewService = Depends(get_realtime_view_service),
) -> list[StopSchema]:
    return [
        StopSchema(
            stop_id=s.id,
            name=s.name,
            location=GeoPointSchema(lat=s.location.lat, lon=s.location.lon),
        )
        for s in service.stops()
    ]


@router.get("/vehicles", response_model=VehiclesResponseSchema)
def list_vehicles(
    route_id: list[str] | None = Query(default=None),
    service: RealtimeViewService = Depends(get_realtime_view_service),
) -> VehiclesResponseSchema:
    route_ids = set(route_id) if route_id else None
    feed_timestamp, annotations = service.vehicle_view(route_ids=route_ids)

    return VehiclesResponseSchema(
        feed_timestamp=feed_timestamp,
        vehicles=[
            VehicleSchema(
                vehicle_id=a.vehicle_id,
                lat=a.lat,
                lon=a.lon,
                bearing=a.bearing,
                route_id=a.route_id,
                trip_id=a.trip_id,
            )
            for a in annotations
        ],
    )


@router.get("/vehicles/{vehicle_id}/trip-update", response_model=TripUpdateSchema)
def get_trip_update(
    vehicle_id: str,
    service: RealtimeViewService = Depends(get_realtime_view_service),
) -> TripUpdateSchema:
    tu = service.trip_update_for_vehicle(vehicle_id)
    if tu is None:
        raise HTTPException(
            status_code=404, detail=f"No trip update for vehicle {vehicle_id}"
        )
    return TripUpdateSchema(
        vehicle_id=tu.vehicle_id,
        trip_id=tu.trip_id,
        route_id=tu.route_id,
        stop_time_updates=[
            StopTimeUpdateSchema(
                stop_id=u.stop_id,
                stop_sequence=u.stop_sequence,
                arrival_epoch_s=u.arrival_epoch_s,
                departure_epoch_s=u.departure_epoch_s,
            )
            for u in tu.stop_time_updates
        ],
    )


@router.get(
    "/vehicles/{vehicle_id}/stops", response_model=list[StopAnnotationSchema]
)
def list_vehicle_stops(
    vehicle_id: str,
    service: RealtimeViewService = Depends(get_realtime_view_service),
) -> list[StopAnnotationSchema]:
    return [
        StopAnnotationSchema(
            stop_id=a.stop_id,
            description=a.description,
            location=GeoPointSchema(lat=a.location.lat, lon=a.location.lon),
            kind=a.kind,
            time_epoch_s=a.time_epoch_s,
            time=a.time,
        )
        for a in service.stop_annotations_for_vehicle(vehicle_id)
    ]
