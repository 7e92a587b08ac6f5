"""
CLI tool to check that the in-memory and the store-side window selection agree.

With --load the CSV is (re)loaded into the store first and the in-memory
selection runs over the loaded records; otherwise the in-memory selection
runs over the records already stored in the table.
"""

import argparse
import sys
from logging import getLogger

from stwindow.cli.common_args import (
    add_database_args,
    add_environment_args,
    add_verbosity_args,
    add_window_args,
    configure_logging,
    create_db_handler,
    load_environment_with_validation,
    window_from_args,
)
from stwindow.compare import compare_subsets
from stwindow.dataset import load_fires_csv
from stwindow.range_filter import select_records

logger = getLogger("STWindow")


def main():
    parser = argparse.ArgumentParser(description="Compare the in-memory and the store-side selection of a spatio-temporal window")

    parser.add_argument("--csv", type=str, help="CSV export of the raw dataset (required with --load)")
    parser.add_argument("--load", action="store_true", help="Replace the point table with the CSV contents before comparing")
    parser.add_argument("--plot-file", type=str, help="Write a side-by-side plot of both subsets to this file")
    parser.add_argument("--tolerance", type=float, default=1e-6, help="Allowed coordinate difference (default: 1e-6)")

    add_database_args(parser)
    add_window_args(parser)
    add_environment_args(parser)
    add_verbosity_args(parser)

    args = parser.parse_args()

    configure_logging(args)
    load_environment_with_validation(args.env_file)
    window = window_from_args(args)

    if args.load and not args.csv:
        logger.error("--load requires --csv")
        sys.exit(1)

    db_handler = None
    try:
        db_handler = create_db_handler(args)

        if args.load:
            if args.db_backend == "postgres":
                db_handler.enable_extensions()
            db_handler.create_point_table(replace=True)
            records = db_handler.load_records(load_fires_csv(args.csv))
            db_handler.create_indexes()
        else:
            records = db_handler.fetch_all()
            if not records:
                logger.warning(f"Table {db_handler.table} is empty, run stwindow-load-points or pass --load")

        in_memory = select_records(records, window)
        delegated = db_handler.query_window(window)
        comparison = compare_subsets(in_memory, delegated, tolerance=args.tolerance)
    except Exception as e:
        logger.error(f"Error comparing subsets: {e}")
        sys.exit(1)
    finally:
        if db_handler is not None:
            db_handler.close()

    print(comparison.summary())

    if args.plot_file:
        from stwindow.plotting import plot_subset_comparison

        delegated_title = "PostGIS subset" if args.db_backend == "postgres" else "SQLite subset"
        plot_subset_comparison(records, in_memory, delegated, window, output_path=args.plot_file, delegated_title=delegated_title)

    sys.exit(0 if comparison.equivalent else 1)


if __name__ == "__main__":
    main()
