from __future__ import annotations


class TransitDataError(Exception):
    """Base exception for stop table and realtime feed ingestion failures."""


class MalformedStopRecordError(TransitDataError):
    """Raised when a stop table record cannot be turned into a Stop.

    Aborts the whole table parse: a corrupt table is a build/config problem,
    not something to skip over at runtime.
    """

    def __init__(self, *, line_number: int, field_index: int, line: str, reason: str):
        self.line_number = line_number
        self.field_index = field_index
        self.line = line
        self.reason = reason
        super().__init__(
            f"Malformed stop record at line {line_number}, field {field_index}: "
            f"{reason} ({line!r})"
        )


class StopTableReadError(TransitDataError):
    """Raised when the stop table file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot read stop table {path}: {reason}")


class FeedDecodeError(TransitDataError):
    """Raised when realtime feed bytes are not a valid feed message."""
