"""
Field-name normalisation of store result rows.

Stores return lower-case field names (``ogc_fid``, ``x``, ``y``, ``time``)
which differ from the PointRecord attributes; rows must go through
``normalize_row`` before they are compared with in-memory records.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from stwindow.records import PointRecord

STORE_FIELD_MAP = {"ogc_fid": "id", "x": "x", "y": "y", "time": "time"}


def _normalize_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


def normalize_row(row: Mapping[str, Any]) -> PointRecord:
    """
    Map a store row onto a PointRecord.

    Raises:
        KeyError: If the row lacks one of the store fields
    """
    values = {attr: row[field] for field, attr in STORE_FIELD_MAP.items()}
    return PointRecord(
        id=int(values["id"]),
        x=float(values["x"]),
        y=float(values["y"]),
        time=_normalize_time(values["time"]),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[PointRecord]:
    return [normalize_row(row) for row in rows]
