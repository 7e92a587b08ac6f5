"""
stwindow - Spatio-temporal window subsetting of point datasets.

A window (inclusive spatial rectangle, half-open time interval) is evaluated
either in memory over loaded records or inside a PostgreSQL/PostGIS (or
SQLite) store, and both selections can be compared and plotted.
"""

from stwindow.compare import SubsetComparison, compare_subsets
from stwindow.dataset import load_fires_csv
from stwindow.db_handler import get_db_handler
from stwindow.normalize import normalize_row, normalize_rows
from stwindow.query_builder import build_postgis_window_query, build_sqlite_window_query
from stwindow.range_filter import select_records
from stwindow.records import COORDINATE_SCALE, EPOCH_DATE, FIRES_SRID, PointRecord, time_index_to_datetime, transform_raw_record
from stwindow.window import FIRES_1990S_WINDOW, SpatioTemporalWindow

__all__ = [
    "PointRecord",
    "SpatioTemporalWindow",
    "FIRES_1990S_WINDOW",
    "COORDINATE_SCALE",
    "EPOCH_DATE",
    "FIRES_SRID",
    "time_index_to_datetime",
    "transform_raw_record",
    "load_fires_csv",
    "select_records",
    "build_postgis_window_query",
    "build_sqlite_window_query",
    "normalize_row",
    "normalize_rows",
    "get_db_handler",
    "compare_subsets",
    "SubsetComparison",
]
