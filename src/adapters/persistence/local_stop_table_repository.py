from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import IStopTableRepository
from src.domain.algorithms.stop_table import parse_stop_table
from src.domain.exceptions import StopTableReadError
from src.domain.models import Stop


@dataclass(slots=True)
class LocalStopTableRepository(IStopTableRepository):
    """Loads the CRLF-delimited stop table from a local file.

    Env vars:
      - STOP_TABLE_PATH: path to the stop table (default data/stops.txt)
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("STOP_TABLE_PATH") or "data/stops.txt"
        return Path(value)

    def load_stops(self) -> tuple[Stop, ...]:
        path = self._path()
        try:
            # newline="" keeps the CRLF record separators intact.
            with path.open("r", encoding="utf-8", newline="") as fp:
                text = fp.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise StopTableReadError(str(path), str(exc)) from exc

        return parse_stop_table(text)
