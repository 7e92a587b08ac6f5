"""
Handles the connection to a SQLite database holding the point table.

SQLite has no spatial types, so coordinates are kept in plain REAL columns next
to the WKB encoding of the point, and B-tree indexes stand in for GiST.
"""

import sqlite3
from collections.abc import Iterable
from logging import getLogger

from shapely.geometry import Point

from stwindow.db_handler.abstract import AbstractDBHandler
from stwindow.normalize import normalize_rows
from stwindow.query_builder import build_sqlite_window_query, format_sqlite_time, quote_sqlite_identifier
from stwindow.records import PointRecord
from stwindow.window import SpatioTemporalWindow

logger = getLogger("STWindow")


class SQLiteDBHandler(AbstractDBHandler):
    def __init__(self, db_path: str = ":memory:", table: str = "fires") -> None:
        try:
            self.conn = sqlite3.connect(db_path)
            self.conn.row_factory = sqlite3.Row
            self.cur = self.conn.cursor()
        except sqlite3.Error as e:
            logger.error(f"Error connecting to SQLite database at {db_path}: {e}")
            raise
        self.db_path = db_path
        self.table = table

    def __repr__(self) -> str:
        return "sqlite"

    def _execute(self, query: str, params: tuple = ()) -> None:
        try:
            self.cur.execute(query, params)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error executing query: {query}")
            logger.error(e)
            self.conn.rollback()
            raise

    def create_point_table(self, replace: bool = False) -> None:
        table = quote_sqlite_identifier(self.table)
        if replace:
            self._execute(f"DROP TABLE IF EXISTS {table}")
        self._execute(
            f"""CREATE TABLE IF NOT EXISTS {table} (
                ogc_fid INTEGER PRIMARY KEY AUTOINCREMENT,
                wkb_geometry BLOB NOT NULL,
                x REAL NOT NULL,
                y REAL NOT NULL,
                time TEXT NOT NULL
            )"""
        )
        logger.info(f"Point table {self.table} ready in {self.db_path}")

    def load_records(self, records: Iterable[PointRecord]) -> list[PointRecord]:
        insert = f"INSERT INTO {quote_sqlite_identifier(self.table)} (wkb_geometry, x, y, time) VALUES (?, ?, ?, ?)"
        loaded: list[PointRecord] = []
        try:
            for record in records:
                self.cur.execute(insert, (Point(record.x, record.y).wkb, record.x, record.y, format_sqlite_time(record.time)))
                loaded.append(PointRecord(x=record.x, y=record.y, time=record.time, id=self.cur.lastrowid))
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to load records into {self.table}: {e}")
            self.conn.rollback()
            raise

        logger.info(f"Loaded {len(loaded)} records into {self.table}")
        return loaded

    def create_indexes(self) -> None:
        table = quote_sqlite_identifier(self.table)
        self._execute(f"CREATE INDEX IF NOT EXISTS {quote_sqlite_identifier(self.table + '_xy_idx')} ON {table} (x, y)")
        self._execute(f"CREATE INDEX IF NOT EXISTS {quote_sqlite_identifier(self.table + '_time_idx')} ON {table} (time)")
        logger.info(f"Indexes on {self.table} ready")

    def query_window(self, window: SpatioTemporalWindow) -> list[PointRecord]:
        query, params = build_sqlite_window_query(window, table=self.table)
        try:
            rows = self.cur.execute(query, params).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error executing window query: {e}")
            raise

        logger.info(f"Window query returned {len(rows)} rows")
        return normalize_rows(dict(row) for row in rows)

    def fetch_all(self) -> list[PointRecord]:
        rows = self.cur.execute(f"SELECT ogc_fid, x, y, time FROM {quote_sqlite_identifier(self.table)} ORDER BY ogc_fid").fetchall()
        return normalize_rows(dict(row) for row in rows)

    def close(self) -> None:
        try:
            self.cur.close()
            self.conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error closing SQLite connection: {e}")
            raise
