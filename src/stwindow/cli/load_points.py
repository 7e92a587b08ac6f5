"""
CLI tool to push the fires dataset into the point store and index it.
"""

import argparse
import sys
from logging import getLogger

from stwindow.cli.common_args import (
    add_database_args,
    add_environment_args,
    add_verbosity_args,
    configure_logging,
    create_db_handler,
    load_environment_with_validation,
)
from stwindow.dataset import load_fires_csv

logger = getLogger("STWindow")


def main():
    parser = argparse.ArgumentParser(description="Load the raw fires CSV into a point table with spatial and temporal indexes")

    parser.add_argument("--csv", type=str, required=True, help="CSV export of the raw dataset (Time, X, Y)")
    parser.add_argument("--replace", action="store_true", help="Drop an existing point table first")
    parser.add_argument("--no-indexes", action="store_true", help="Skip building the spatial and temporal indexes")

    add_database_args(parser)
    add_environment_args(parser)
    add_verbosity_args(parser)

    args = parser.parse_args()

    configure_logging(args)
    load_environment_with_validation(args.env_file)

    try:
        records = load_fires_csv(args.csv)
    except (OSError, ValueError) as e:
        logger.error(f"Error reading {args.csv}: {e}")
        sys.exit(1)

    db_handler = None
    try:
        db_handler = create_db_handler(args)

        if args.db_backend == "postgres":
            db_handler.enable_extensions()
        db_handler.create_point_table(replace=args.replace)
        loaded = db_handler.load_records(records)

        if not args.no_indexes:
            db_handler.create_indexes()

        logger.info(f"Stored {len(loaded)} records in {db_handler.table}")
    except Exception as e:
        logger.error(f"Error loading points: {e}")
        sys.exit(1)
    finally:
        if db_handler is not None:
            db_handler.close()


if __name__ == "__main__":
    main()
