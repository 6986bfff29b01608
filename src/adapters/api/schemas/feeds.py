from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from src.domain.models.realtime import FeedType


class FeedSnapshotSchema(BaseModel):
    feed_type: FeedType
    entity_count: int
    vehicle_count: int
    trip_update_count: int
    feed_timestamp: datetime | None = None
