from .annotation import StopAnnotation, VehicleAnnotation
from .geo import GeoPoint
from .realtime import (
    FeedEntity,
    FeedSnapshot,
    FeedType,
    StopTimeUpdate,
    TripUpdate,
    VehiclePosition,
)
from .stop import Stop

__all__ = [
    "FeedEntity",
    "FeedSnapshot",
    "FeedType",
    "GeoPoint",
    "Stop",
    "StopAnnotation",
    "StopTimeUpdate",
    "TripUpdate",
    "VehicleAnnotation",
    "VehiclePosition",
]
