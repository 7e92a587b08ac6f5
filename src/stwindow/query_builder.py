"""
Compilation of a spatio-temporal window into store queries.

Bounds are always passed as bound parameters and identifiers are escaped by
the driver, so no window value is ever interpolated into the SQL text.
The selected fields use the lower-case names ``ogc_fid``, ``x``, ``y`` and
``time``; see ``stwindow.normalize`` for the mapping back to PointRecord.
"""

from datetime import datetime

from psycopg import sql

from stwindow.records import FIRES_SRID
from stwindow.window import SpatioTemporalWindow


def window_params(window: SpatioTemporalWindow) -> tuple[float, float, float, float, datetime, datetime]:
    """Bound values in predicate order: x_min, x_max, y_min, y_max, time_min, time_max."""
    return (window.x_min, window.x_max, window.y_min, window.y_max, window.time_min, window.time_max)


def build_postgis_window_query(
    window: SpatioTemporalWindow,
    table: str = "fires",
    id_column: str = "ogc_fid",
    geometry_column: str = "wkb_geometry",
    time_column: str = "time",
    srid: int = FIRES_SRID,
    use_spatial_index: bool = True,
) -> tuple[sql.Composed, tuple]:
    """
    Build the PostGIS query selecting the points inside the window.

    Args:
        window: The spatio-temporal window
        table: Table holding the points
        id_column: Store-assigned id column
        geometry_column: Point geometry column
        time_column: Timestamp column
        srid: SRID of the geometry column
        use_spatial_index: Add a bounding-box (&&) clause so the GiST index can be used

    Returns:
        Tuple of (composed query, parameters)
    """
    geom = sql.Identifier(geometry_column)
    time = sql.Identifier(time_column)

    if use_spatial_index:
        # && is inclusive on the box edges; the exact predicate below still decides
        envelope = sql.SQL("{geom} && ST_MakeEnvelope(%s, %s, %s, %s, %s) AND ").format(geom=geom)
        envelope_params: tuple = (window.x_min, window.y_min, window.x_max, window.y_max, srid)
    else:
        envelope = sql.SQL("")
        envelope_params = ()

    query = sql.SQL(
        "SELECT {id} AS {id_alias}, ST_X({geom}) AS {x_alias}, ST_Y({geom}) AS {y_alias}, {time} AS {time_alias} "
        "FROM {table} "
        "WHERE {envelope}"
        "ST_X({geom}) >= %s AND ST_X({geom}) <= %s AND "
        "ST_Y({geom}) >= %s AND ST_Y({geom}) <= %s AND "
        "{time} >= %s AND {time} < %s"
    ).format(
        id=sql.Identifier(id_column),
        id_alias=sql.Identifier("ogc_fid"),
        geom=geom,
        x_alias=sql.Identifier("x"),
        y_alias=sql.Identifier("y"),
        time=time,
        time_alias=sql.Identifier("time"),
        table=sql.Identifier(table),
        envelope=envelope,
    )
    return query, envelope_params + window_params(window)


def quote_sqlite_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def format_sqlite_time(value: datetime) -> str:
    """Fixed-width text (four-digit year, microseconds) so that string order equals chronological order."""
    return value.isoformat(sep=" ", timespec="microseconds")


def build_sqlite_window_query(
    window: SpatioTemporalWindow,
    table: str = "fires",
    id_column: str = "ogc_fid",
    x_column: str = "x",
    y_column: str = "y",
    time_column: str = "time",
) -> tuple[str, tuple]:
    """Build the SQLite query selecting the points inside the window."""
    id_ = quote_sqlite_identifier(id_column)
    x = quote_sqlite_identifier(x_column)
    y = quote_sqlite_identifier(y_column)
    time = quote_sqlite_identifier(time_column)

    query = (
        f"SELECT {id_} AS ogc_fid, {x} AS x, {y} AS y, {time} AS time "
        f"FROM {quote_sqlite_identifier(table)} "
        f"WHERE {x} >= ? AND {x} <= ? AND "
        f"{y} >= ? AND {y} <= ? AND "
        f"{time} >= ? AND {time} < ?"
    )
    params = (
        window.x_min,
        window.x_max,
        window.y_min,
        window.y_max,
        format_sqlite_time(window.time_min),
        format_sqlite_time(window.time_max),
    )
    return query, params
