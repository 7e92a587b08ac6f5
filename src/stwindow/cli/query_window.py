"""
CLI tool to select the points of a spatio-temporal window from the point store.
"""

import argparse
import csv
import json
import sys
from logging import getLogger

from stwindow.cli.common_args import (
    add_database_args,
    add_environment_args,
    add_output_args,
    add_verbosity_args,
    add_window_args,
    configure_logging,
    create_db_handler,
    load_environment_with_validation,
    window_from_args,
)
from stwindow.records import PointRecord

logger = getLogger("STWindow")


def write_records(records: list[PointRecord], output_format: str, file) -> None:
    if output_format == "json":
        rows = [{"id": r.id, "x": r.x, "y": r.y, "time": r.time.isoformat()} for r in records]
        print(json.dumps(rows), file=file)
    elif output_format == "lines":
        for record in records:
            print(record.id, file=file)
    else:
        writer = csv.writer(file)
        writer.writerow(["id", "x", "y", "time"])
        for record in records:
            writer.writerow([record.id, record.x, record.y, record.time.isoformat(sep=" ")])


def main(file=sys.stdout):
    parser = argparse.ArgumentParser(description="Select the points inside a spatio-temporal window from the point store")

    add_database_args(parser)
    add_window_args(parser)
    add_environment_args(parser)
    add_output_args(parser)
    add_verbosity_args(parser)

    args = parser.parse_args()

    configure_logging(args)
    load_environment_with_validation(args.env_file)
    window = window_from_args(args)

    output_file = None
    db_handler = None
    try:
        output_file = open(args.output_file, "w", newline="") if args.output_file else file
        db_handler = create_db_handler(args)
        records = sorted(db_handler.query_window(window), key=lambda r: r.id)
        write_records(records, args.output_format, output_file)
        logger.info(f"Found {len(records)} records in window")
    except Exception as e:
        logger.error(f"Error querying window: {e}")
        sys.exit(1)
    finally:
        if db_handler is not None:
            db_handler.close()
        if args.output_file and output_file is not None:
            output_file.close()


if __name__ == "__main__":
    main()
