from __future__ import annotations

from enum import IntEnum
from typing import Iterable

from src.domain.exceptions import MalformedStopRecordError
from src.domain.models import GeoPoint, Stop

RECORD_SEPARATOR = "\r\n"
FIELD_SEPARATOR = ","


class StopColumn(IntEnum):
    """Fixed positional layout of the stop table.

    Only LATITUDE, LONGITUDE, ID and DESCRIPTION are read; the rest still
    occupy their slot.
    """

    LATITUDE = 0
    ZONE_ID = 1
    LONGITUDE = 2
    URL = 3
    ID = 4
    DESCRIPTION = 5
    NAME = 6
    TYPE = 7


_REQUIRED_FIELDS = (
    max(
        StopColumn.LATITUDE,
        StopColumn.LONGITUDE,
        StopColumn.ID,
        StopColumn.DESCRIPTION,
    )
    + 1
)


def _parse_coordinate(
    fields: list[str], column: StopColumn, *, line_number: int, line: str
) -> float:
    raw = fields[column]
    try:
        return float(raw)
    except ValueError:
        raise MalformedStopRecordError(
            line_number=line_number,
            field_index=int(column),
            line=line,
            reason=f"{column.name.lower()} is not a number: {raw!r}",
        ) from None


def parse_stop_record(line: str, *, line_number: int) -> Stop:
    """Build a Stop from one comma-delimited stop table record."""

    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < _REQUIRED_FIELDS:
        raise MalformedStopRecordError(
            line_number=line_number,
            field_index=len(fields),
            line=line,
            reason=f"expected at least {_REQUIRED_FIELDS} fields, got {len(fields)}",
        )

    lat = _parse_coordinate(
        fields, StopColumn.LATITUDE, line_number=line_number, line=line
    )
    lon = _parse_coordinate(
        fields, StopColumn.LONGITUDE, line_number=line_number, line=line
    )

    stop_id = fields[StopColumn.ID]
    if not stop_id:
        raise MalformedStopRecordError(
            line_number=line_number,
            field_index=int(StopColumn.ID),
            line=line,
            reason="empty stop id",
        )

    try:
        location = GeoPoint(lat=lat, lon=lon)
    except ValueError as exc:
        column = (
            StopColumn.LONGITUDE if -90.0 <= lat <= 90.0 else StopColumn.LATITUDE
        )
        raise MalformedStopRecordError(
            line_number=line_number,
            field_index=int(column),
            line=line,
            reason=str(exc),
        ) from exc

    return Stop(id=stop_id, name=fields[StopColumn.DESCRIPTION], location=location)


def parse_stop_table(text: str) -> tuple[Stop, ...]:
    """Parse the full text of a CRLF-delimited stop table.

    The first record is a header and is discarded. Empty records are skipped.
    Any malformed record aborts the parse with MalformedStopRecordError.
    Output keeps source order.
    """

    records = text.split(RECORD_SEPARATOR)

    stops: list[Stop] = []
    seen: set[str] = set()
    # Line 1 is the header.
    for line_number, line in enumerate(records[1:], start=2):
        if not line:
            continue
        stop = parse_stop_record(line, line_number=line_number)
        if stop.id in seen:
            raise MalformedStopRecordError(
                line_number=line_number,
                field_index=int(StopColumn.ID),
                line=line,
                reason=f"duplicate stop id {stop.id!r}",
            )
        seen.add(stop.id)
        stops.append(stop)

    return tuple(stops)


def index_stops(stops: Iterable[Stop]) -> dict[str, Stop]:
    return {s.id: s for s in stops}
