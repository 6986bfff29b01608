from .local_stop_table_repository import LocalStopTableRepository

__all__ = [
    "LocalStopTableRepository",
]
