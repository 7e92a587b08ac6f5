"""
Handles the connection to a PostgreSQL/PostGIS database holding the point table.

The table layout follows an OGR import of a point layer: a serial ``ogc_fid``,
a ``wkb_geometry`` point column and a ``time`` column that is loaded as text
and converted to ``timestamp`` afterwards.
"""

from collections.abc import Iterable
from logging import getLogger

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from shapely.geometry import Point

from stwindow.db_handler.abstract import AbstractDBHandler
from stwindow.normalize import normalize_rows
from stwindow.query_builder import build_postgis_window_query
from stwindow.records import FIRES_SRID, PointRecord
from stwindow.window import SpatioTemporalWindow

logger = getLogger("STWindow")

INDEX_METHODS = ("gist", "btree")


class PostgresDBHandler(AbstractDBHandler):
    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        dbname: str,
        password: str | None = None,
        table: str = "fires",
        srid: int = FIRES_SRID,
        timeout: str = "0",
        id_column: str = "ogc_fid",
        geometry_column: str = "wkb_geometry",
        time_column: str = "time",
    ) -> None:
        # PostgreSQL statement_timeout expects milliseconds when specified as a number without unit
        timeout_ms = int(timeout) * 1000 if str(timeout) != "0" else 0
        self.conn = psycopg.connect(
            host=host, port=port, user=user, password=password, dbname=dbname, options=f"-c statement_timeout={timeout_ms}"
        )
        self.cur = self.conn.cursor()
        self.table = table
        self.srid = int(srid)
        self.id_column = id_column
        self.geometry_column = geometry_column
        self.time_column = time_column

    def __repr__(self) -> str:
        return "postgres"

    def _execute(self, query, params=None) -> None:
        """Execute and commit a statement, rolling back and re-raising on failure."""
        try:
            self.cur.execute(query, params)
            self.conn.commit()
        except psycopg.Error as e:
            logger.error(f"POSTGRES EXECUTE ERROR: {type(e).__name__}: {e}")
            self.conn.rollback()
            raise

    def enable_extensions(self) -> None:
        """Enable PostGIS and btree_gist in the connected database."""
        for extension in ("postgis", "btree_gist"):
            self._execute(sql.SQL("CREATE EXTENSION IF NOT EXISTS {}").format(sql.Identifier(extension)))
            logger.info(f"Extension {extension} available")

    def create_point_table(self, replace: bool = False) -> None:
        table = sql.Identifier(self.table)
        if replace:
            self._execute(sql.SQL("DROP TABLE IF EXISTS {}").format(table))
            logger.info(f"Dropped table {self.table}")

        self._execute(
            sql.SQL(
                """CREATE TABLE IF NOT EXISTS {table} (
                    {id} SERIAL PRIMARY KEY,
                    {geom} geometry(Point, {srid}),
                    {time} varchar
                )"""
            ).format(
                table=table,
                id=sql.Identifier(self.id_column),
                geom=sql.Identifier(self.geometry_column),
                srid=sql.Literal(self.srid),
                time=sql.Identifier(self.time_column),
            )
        )
        logger.info(f"Point table {self.table} ready")

    def load_records(self, records: Iterable[PointRecord]) -> list[PointRecord]:
        """
        Insert the records as WKB points and convert the time column to timestamp.

        Returns:
            The records with the ids assigned by the serial column
        """
        insert = sql.SQL("INSERT INTO {table} ({geom}, {time}) VALUES (ST_GeomFromWKB(%s, %s), %s) RETURNING {id}").format(
            table=sql.Identifier(self.table),
            geom=sql.Identifier(self.geometry_column),
            time=sql.Identifier(self.time_column),
            id=sql.Identifier(self.id_column),
        )

        loaded: list[PointRecord] = []
        try:
            for record in records:
                self.cur.execute(insert, (Point(record.x, record.y).wkb, self.srid, record.time.isoformat(sep=" ")))
                row = self.cur.fetchone()
                if row is None:
                    raise RuntimeError(f"No id returned for record {record}")
                loaded.append(PointRecord(x=record.x, y=record.y, time=record.time, id=row[0]))
            self.conn.commit()
        except (psycopg.Error, RuntimeError) as e:
            logger.error(f"Failed to load records into {self.table}: {e}")
            self.conn.rollback()
            raise

        logger.info(f"Loaded {len(loaded)} records into {self.table}")
        self.convert_time_column()
        return loaded

    def column_types(self) -> dict[str, str]:
        """Column name to data type for the point table."""
        self.cur.execute(
            "SELECT column_name, data_type FROM information_schema.columns WHERE table_name = %s ORDER BY ordinal_position",
            (self.table,),
        )
        return {name: data_type for name, data_type in self.cur.fetchall()}

    def list_fields(self) -> list[str]:
        return list(self.column_types())

    def list_tables(self) -> list[str]:
        self.cur.execute(
            "SELECT table_name FROM information_schema.tables WHERE table_schema = current_schema() ORDER BY table_name"
        )
        return [row[0] for row in self.cur.fetchall()]

    def convert_time_column(self) -> None:
        """Convert the text time column to timestamp so it can be B-tree indexed and compared."""
        data_type = self.column_types().get(self.time_column)
        if data_type is not None and data_type.startswith("timestamp"):
            logger.debug(f"Column {self.time_column} is already {data_type}")
            return

        time = sql.Identifier(self.time_column)
        self._execute(
            sql.SQL("ALTER TABLE {table} ALTER COLUMN {time} TYPE timestamp USING {time}::timestamp").format(
                table=sql.Identifier(self.table), time=time
            )
        )
        logger.info(f"Converted {self.table}.{self.time_column} to timestamp")

    def create_index(self, column: str, index_name: str, method: str = "btree") -> None:
        method = method.lower()
        if method not in INDEX_METHODS:
            raise ValueError(f"Unsupported index method: {method}. Options: {', '.join(INDEX_METHODS)}")

        self._execute(
            sql.SQL("CREATE INDEX IF NOT EXISTS {idx} ON {table} USING {method} ({column})").format(
                idx=sql.Identifier(index_name),
                table=sql.Identifier(self.table),
                method=sql.SQL(method),
                column=sql.Identifier(column),
            )
        )
        logger.info(f"Index {index_name} ({method}) on {self.table}.{column} ready")

    def create_indexes(self) -> None:
        # Points are not one-dimensional, so GiST; time sorts along one axis, so B-tree
        self.create_index(self.geometry_column, f"{self.table}_geom_idx", method="gist")
        self.convert_time_column()
        self.create_index(self.time_column, f"{self.table}_idx_time", method="btree")

    def query_window(self, window: SpatioTemporalWindow, use_spatial_index: bool = True) -> list[PointRecord]:
        query, params = build_postgis_window_query(
            window,
            table=self.table,
            id_column=self.id_column,
            geometry_column=self.geometry_column,
            time_column=self.time_column,
            srid=self.srid,
            use_spatial_index=use_spatial_index,
        )
        logger.debug(f"POSTGRES WINDOW QUERY: params={params}")
        try:
            with self.conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
            self.conn.commit()
        except psycopg.Error as e:
            logger.error(f"POSTGRES WINDOW QUERY ERROR: {type(e).__name__}: {e}")
            self.conn.rollback()
            raise

        logger.info(f"Window query returned {len(rows)} rows")
        return normalize_rows(rows)

    def fetch_all(self) -> list[PointRecord]:
        query = sql.SQL(
            "SELECT {id} AS ogc_fid, ST_X({geom}) AS x, ST_Y({geom}) AS y, {time} AS time FROM {table} ORDER BY {id}"
        ).format(
            id=sql.Identifier(self.id_column),
            geom=sql.Identifier(self.geometry_column),
            time=sql.Identifier(self.time_column),
            table=sql.Identifier(self.table),
        )
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query)
            rows = cur.fetchall()
        self.conn.commit()
        return normalize_rows(rows)

    def close(self) -> None:
        self.cur.close()
        self.conn.close()
