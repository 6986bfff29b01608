from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool

from src.adapters.api.dependencies import get_feed_store
from src.adapters.api.schemas.feeds import FeedSnapshotSchema
from src.app.services.feed_store import FeedStore
from src.domain.models.realtime import FeedSnapshot, FeedType

router = APIRouter(prefix="/feeds", tags=["feeds"])


def _snapshot_to_schema(
    feed_type: FeedType, snapshot: FeedSnapshot
) -> FeedSnapshotSchema:
    return FeedSnapshotSchema(
        feed_type=feed_type,
        entity_count=len(snapshot.entities),
        vehicle_count=sum(1 for e in snapshot.entities if e.vehicle is not None),
        trip_update_count=sum(
            1 for e in snapshot.entities if e.trip_update is not None
        ),
        feed_timestamp=snapshot.timestamp,
    )


@router.put("/{feed_type}", response_model=FeedSnapshotSchema)
async def load_feed(
    feed_type: FeedType,
    request: Request,
    store: FeedStore = Depends(get_feed_store),
) -> FeedSnapshotSchema:
    # Body is the raw GTFS-Realtime FeedMessage (application/x-protobuf).
    raw = await request.body()
    # Decode in the threadpool, off the event loop.
    snapshot = await run_in_threadpool(store.load, feed_type, raw)
    return _snapshot_to_schema(feed_type, snapshot)


@router.get("/{feed_type}", response_model=FeedSnapshotSchema)
def get_feed(
    feed_type: FeedType,
    store: FeedStore = Depends(get_feed_store),
) -> FeedSnapshotSchema:
    snapshot = store.current_snapshot(feed_type)
    if snapshot is None:
        raise HTTPException(
            status_code=404, detail=f"No {feed_type.value} feed loaded"
        )
    return _snapshot_to_schema(feed_type, snapshot)


@router.delete("/{feed_type}", status_code=204)
def clear_feed(
    feed_type: FeedType,
    store: FeedStore = Depends(get_feed_store),
) -> Response:
    store.clear(feed_type)
    return Response(status_code=204)
