"""
Loading of the raw fires dataset from a CSV export.

The expected layout is the one produced by ``write.csv(fires)`` in R: an
optional unnamed row-name column followed by ``Time``, ``X`` and ``Y``.
"""

import csv
from logging import getLogger
from pathlib import Path

from stwindow.records import PointRecord, transform_raw_record

logger = getLogger("STWindow")

REQUIRED_COLUMNS = ("time", "x", "y")


def load_fires_csv(path: str | Path) -> list[PointRecord]:
    """
    Read the raw dataset and return transformed records in file order.

    Args:
        path: Path to the CSV file

    Returns:
        List of PointRecord without ids (ids are assigned by the store)

    Raises:
        ValueError: If a required column is missing or a value is not numeric
    """
    path = Path(path)
    records: list[PointRecord] = []

    with path.open(newline="") as f:
        reader = csv.reader(f)
        try:
            header = next(reader)
        except StopIteration:
            raise ValueError(f"{path} is empty") from None

        columns = {name.strip().strip('"').lower(): idx for idx, name in enumerate(header)}
        missing = [name for name in REQUIRED_COLUMNS if name not in columns]
        if missing:
            raise ValueError(f"{path}: missing column(s) {', '.join(missing)}")

        for line_no, row in enumerate(reader, start=2):
            if not row or all(not cell.strip() for cell in row):
                continue
            try:
                time_index = float(row[columns["time"]])
                x = float(row[columns["x"]])
                y = float(row[columns["y"]])
            except (IndexError, ValueError) as e:
                raise ValueError(f"{path}:{line_no}: invalid record {row!r}: {e}") from e
            records.append(transform_raw_record(time_index, x, y))

    logger.info(f"Loaded {len(records)} records from {path}")
    return records
