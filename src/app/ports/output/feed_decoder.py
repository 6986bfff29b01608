from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.realtime import FeedSnapshot


class IFeedDecoder(ABC):
    """Port for turning raw realtime feed bytes into a FeedSnapshot."""

    @abstractmethod
    def decode(self, raw: bytes) -> FeedSnapshot:
        """Decode one feed message; raise FeedDecodeError on bad input."""
