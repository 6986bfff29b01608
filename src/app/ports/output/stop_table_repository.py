from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Stop


class IStopTableRepository(ABC):
    """Port for loading the static stop table."""

    @abstractmethod
    def load_stops(self) -> tuple[Stop, ...]:
        raise NotImplementedError
