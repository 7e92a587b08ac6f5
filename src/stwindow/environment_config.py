"""
Environment configuration for the point stores.

This module centralises environment variable validation and extraction so that
CLI tools and tests build handlers the same way.
"""

import os
from typing import Any

from stwindow.records import FIRES_SRID


class EnvironmentConfigManager:
    """Centralized environment variable management for database handlers."""

    @staticmethod
    def get_table_config() -> dict[str, Any]:
        """Point table name and SRID (POINTS_TABLE, POINTS_SRID)."""
        srid = os.getenv("POINTS_SRID", str(FIRES_SRID))
        try:
            srid_value = int(srid)
        except ValueError:
            raise ValueError(f"POINTS_SRID must be an integer, got {srid!r}") from None
        return {"table": os.getenv("POINTS_TABLE", "fires"), "srid": srid_value}

    @staticmethod
    def get_postgresql_config(dbname: str | None = None) -> dict[str, Any]:
        """
        Get PostgreSQL connection configuration from environment variables.

        DB_PASSWORD is optional, libpq falls back to ~/.pgpass.

        Args:
            dbname: Database name overriding DB_NAME

        Returns:
            Dictionary with PostgresDBHandler keyword arguments

        Raises:
            ValueError: If required environment variables are missing
        """
        config: dict[str, Any] = {}

        # Required variables
        required_vars = {"DB_NAME": "dbname", "DB_HOST": "host", "DB_USER": "user", "DB_PORT": "port"}
        for var, key in required_vars.items():
            value = dbname if var == "DB_NAME" and dbname else os.getenv(var)
            if not value:
                raise ValueError(f"{var} environment variable not set")
            config[key] = value

        try:
            config["port"] = int(config["port"])
        except ValueError:
            raise ValueError(f"DB_PORT must be an integer, got {config['port']!r}") from None

        config["password"] = os.getenv("DB_PASSWORD") or None
        config["timeout"] = os.getenv("DB_TIMEOUT", "0")
        config.update(EnvironmentConfigManager.get_table_config())
        return config

    @staticmethod
    def get_sqlite_config() -> dict[str, Any]:
        """SQLite database path (SQLITE_DB_PATH, default in-memory) and table name."""
        return {
            "db_path": os.getenv("SQLITE_DB_PATH", ":memory:"),
            "table": EnvironmentConfigManager.get_table_config()["table"],
        }

    @staticmethod
    def get_config(db_type: str) -> dict[str, Any]:
        if db_type.lower() in ("postgres", "postgresql"):
            return EnvironmentConfigManager.get_postgresql_config()
        if db_type.lower() == "sqlite":
            return EnvironmentConfigManager.get_sqlite_config()
        raise ValueError(f"Unsupported database type: {db_type}")
