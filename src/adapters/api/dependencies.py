from __future__ import annotations

from fastapi import Request

from src.adapters.persistence.local_stop_table_repository import (
    LocalStopTableRepository,
)
from src.adapters.realtime.gtfs_realtime_feed_decoder import GtfsRealtimeFeedDecoder
from src.app.services.feed_store import FeedStore
from src.app.services.realtime_view_service import RealtimeViewService


def build_feed_store() -> FeedStore:
    return FeedStore(decoder=GtfsRealtimeFeedDecoder())


def build_realtime_view_service(feed_store: FeedStore) -> RealtimeViewService:
    return RealtimeViewService(
        stop_repository=LocalStopTableRepository(), feed_store=feed_store
    )


# Instances live on app.state; the application root owns their lifecycle.
def get_feed_store(request: Request) -> FeedStore:
    return request.app.state.feed_store


def get_realtime_view_service(request: Request) -> RealtimeViewService:
    return request.app.state.realtime_view_service
