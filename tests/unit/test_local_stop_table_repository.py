from __future__ import annotations

from pathlib import Path

import pytest

from src.adapters.persistence.local_stop_table_repository import (
    LocalStopTableRepository,
)
from src.domain.exceptions import MalformedStopRecordError, StopTableReadError

TABLE = (
    "stop_lat,zone_id,stop_lon,stop_url,stop_id,stop_desc,stop_name,location_type\r\n"
    "39.7,1,-104.9,http://x,S1,Union Station,US,0\r\n"
    "39.73,1,-104.99,,S2,Civic Center,CC,0\r\n"
)


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "stops.txt"
    # newline="" so CRLF is written byte-for-byte on every platform.
    with path.open("w", encoding="utf-8", newline="") as fp:
        fp.write(content)
    return path


def test_load_stops_from_path(tmp_path: Path) -> None:
    repo = LocalStopTableRepository(path=_write(tmp_path, TABLE))

    stops = repo.load_stops()

    assert [s.id for s in stops] == ["S1", "S2"]
    assert stops[0].name == "Union Station"


def test_load_stops_from_env(tmp_path: Path, monkeypatch) -> None:
    path = _write(tmp_path, TABLE)
    monkeypatch.setenv("STOP_TABLE_PATH", str(path))

    assert len(LocalStopTableRepository().load_stops()) == 2


def test_missing_file_raises_read_error(tmp_path: Path) -> None:
    repo = LocalStopTableRepository(path=tmp_path / "missing.txt")

    with pytest.raises(StopTableReadError) as exc_info:
        repo.load_stops()

    assert exc_info.value.path.endswith("missing.txt")


def test_malformed_table_propagates(tmp_path: Path) -> None:
    repo = LocalStopTableRepository(
        path=_write(tmp_path, TABLE + "oops,1,-104.9,,S3,Broken,BR,0\r\n")
    )

    with pytest.raises(MalformedStopRecordError):
        repo.load_stops()
