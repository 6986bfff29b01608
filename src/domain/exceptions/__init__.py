from .ingestion import (
    FeedDecodeError,
    MalformedStopRecordError,
    StopTableReadError,
    TransitDataError,
)

__all__ = [
    "FeedDecodeError",
    "MalformedStopRecordError",
    "StopTableReadError",
    "TransitDataError",
]
