"""
In-memory evaluation of a spatio-temporal window.
"""

from collections.abc import Iterable
from logging import getLogger

from stwindow.records import PointRecord
from stwindow.window import SpatioTemporalWindow

logger = getLogger("STWindow")


def select_records(records: Iterable[PointRecord], window: SpatioTemporalWindow) -> list[PointRecord]:
    """
    Return the records inside the window, preserving their relative order.

    Spatial bounds are closed on both ends, the time bound is closed below and
    open above.
    """
    if window.is_empty:
        logger.debug(f"Window {window} is inverted, nothing to select")
        return []

    selected = [record for record in records if window.contains(record)]
    logger.debug(f"Selected {len(selected)} records in memory")
    return selected
