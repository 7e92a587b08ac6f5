"""
Spatio-temporal query window.

A window is an inclusive spatial rectangle combined with a half-open time
interval ``[time_min, time_max)``. Inverted bounds are allowed and simply
match nothing.
"""

from dataclasses import dataclass
from datetime import date, datetime

from stwindow.records import PointRecord


def _to_datetime(value: datetime | date | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if isinstance(value, datetime):
        # records carry naive timestamps
        if value.tzinfo is not None:
            raise ValueError(f"Time bound must not carry a UTC offset: {value.isoformat()}")
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Unsupported time bound: {value!r}")


@dataclass(frozen=True)
class SpatioTemporalWindow:
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    time_min: datetime
    time_max: datetime

    def __post_init__(self) -> None:
        # frozen dataclass, so normalise through object.__setattr__
        for name in ("x_min", "x_max", "y_min", "y_max"):
            object.__setattr__(self, name, float(getattr(self, name)))
        object.__setattr__(self, "time_min", _to_datetime(self.time_min))
        object.__setattr__(self, "time_max", _to_datetime(self.time_max))

    @classmethod
    def from_strings(cls, x_min, x_max, y_min, y_max, time_min: str, time_max: str) -> "SpatioTemporalWindow":
        """Build a window from loosely typed values, e.g. parsed CLI arguments."""
        return cls(float(x_min), float(x_max), float(y_min), float(y_max), _to_datetime(time_min), _to_datetime(time_max))

    @property
    def is_empty(self) -> bool:
        """True when the bounds are inverted and no record can match."""
        return self.x_min > self.x_max or self.y_min > self.y_max or self.time_min >= self.time_max

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Spatial bounds as (x_min, y_min, x_max, y_max)."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def contains(self, record: PointRecord) -> bool:
        return (
            self.x_min <= record.x <= self.x_max
            and self.y_min <= record.y <= self.y_max
            and self.time_min <= record.time < self.time_max
        )


FIRES_1990S_WINDOW = SpatioTemporalWindow(
    x_min=6400000,
    x_max=6500000,
    y_min=1950000,
    y_max=2050000,
    time_min=datetime(1990, 1, 1),
    time_max=datetime(2000, 1, 1),
)
