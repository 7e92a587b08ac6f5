"""
Point records and the raw-to-projected transform of the fires dataset.

The raw dataset stores coordinates in units of 100000 ft and time as a day
index where 1 corresponds to 1960-01-01.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

COORDINATE_SCALE = 100000
EPOCH_DATE = date(1960, 1, 1)

# NAD83 / California zone 5 (ftUS)
FIRES_SRID = 2229


@dataclass(frozen=True)
class PointRecord:
    x: float
    y: float
    time: datetime
    id: int | None = None


def time_index_to_datetime(time_index: int | float) -> datetime:
    """Convert a 1-based day index into a timestamp; a fractional part is the time of day."""
    epoch = datetime(EPOCH_DATE.year, EPOCH_DATE.month, EPOCH_DATE.day)
    return epoch + timedelta(days=time_index - 1)


def transform_raw_record(time_index: int | float, x: float, y: float, record_id: int | None = None) -> PointRecord:
    return PointRecord(
        x=float(x) * COORDINATE_SCALE,
        y=float(y) * COORDINATE_SCALE,
        time=time_index_to_datetime(time_index),
        id=record_id,
    )
