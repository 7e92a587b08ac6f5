#!/usr/bin/env python3
"""
Script to create the database holding the point table, with PostGIS enabled.

Connects to the maintenance database ('postgres') with the DB_HOST, DB_PORT,
DB_USER and DB_PASSWORD settings and creates DB_NAME (or --db-name).
"""

import argparse
import os
import sys

import dotenv
import psycopg
from psycopg import sql


def create_database(dbname: str, conninfo: dict, drop_existing: bool = False) -> None:
    """Create the database, optionally dropping an existing one first."""
    with psycopg.connect(**conninfo, dbname="postgres", autocommit=True) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (dbname,))
            exists = cur.fetchone() is not None

            if exists and drop_existing:
                print(f"Dropping existing database: {dbname}")
                cur.execute(sql.SQL("DROP DATABASE {} WITH (FORCE)").format(sql.Identifier(dbname)))
                exists = False

            if exists:
                print(f"Database {dbname} already exists")
            else:
                cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(dbname)))
                print(f"Successfully created database: {dbname}")


def enable_extensions(dbname: str, conninfo: dict) -> None:
    with psycopg.connect(**conninfo, dbname=dbname, autocommit=True) as conn:
        with conn.cursor() as cur:
            for extension in ("postgis", "btree_gist"):
                cur.execute(sql.SQL("CREATE EXTENSION IF NOT EXISTS {}").format(sql.Identifier(extension)))
                print(f"Extension {extension} enabled")


def main():
    parser = argparse.ArgumentParser(description="Create the point database with PostGIS and btree_gist")
    parser.add_argument("--db-name", type=str, help="Database to create (default: DB_NAME)")
    parser.add_argument("--drop", action="store_true", help="Drop the database first if it exists")
    parser.add_argument("--env-file", type=str, default=".env", help="Path to environment file (default: .env)")
    args = parser.parse_args()

    dotenv.load_dotenv(args.env_file)

    dbname = args.db_name or os.getenv("DB_NAME")
    if not dbname:
        print("ERROR: DB_NAME environment variable not set and --db-name not given")
        sys.exit(1)

    conninfo = {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "5432")),
        "user": os.getenv("DB_USER"),
        "password": os.getenv("DB_PASSWORD") or None,
    }

    try:
        create_database(dbname, conninfo, drop_existing=args.drop)
        enable_extensions(dbname, conninfo)
    except psycopg.Error as e:
        print(f"Error creating database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
