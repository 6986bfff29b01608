from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from src.app.ports.output import IFeedDecoder
from src.domain.exceptions import FeedDecodeError
from src.domain.models.realtime import FeedSnapshot, FeedType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FeedStore:
    """Holds the latest decoded snapshot per feed type.

    Notes:
      - Decoding happens outside the lock; only the slot swap is guarded.
      - A failed decode leaves the previous snapshot in place.
      - No history is kept beyond the current snapshot.
    """

    decoder: IFeedDecoder

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _snapshots: dict[FeedType, FeedSnapshot] = field(
        default_factory=dict, init=False, repr=False
    )

    def load(self, feed_type: FeedType, raw: bytes) -> FeedSnapshot:
        try:
            snapshot = self.decoder.decode(raw)
        except FeedDecodeError:
            logger.warning(
                "Rejected %s feed (%d bytes); keeping previous snapshot",
                feed_type.value,
                len(raw),
            )
            raise

        with self._lock:
            self._snapshots[feed_type] = snapshot

        logger.info(
            "Replaced %s snapshot (%d entities)",
            feed_type.value,
            len(snapshot.entities),
        )
        return snapshot

    def current_snapshot(self, feed_type: FeedType) -> FeedSnapshot | None:
        with self._lock:
            return self._snapshots.get(feed_type)

    def clear(self, feed_type: FeedType) -> None:
        with self._lock:
            self._snapshots.pop(feed_type, None)
