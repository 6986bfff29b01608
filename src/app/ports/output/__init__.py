from .feed_decoder import IFeedDecoder
from .stop_table_repository import IStopTableRepository

__all__ = [
    "IFeedDecoder",
    "IStopTableRepository",
]
