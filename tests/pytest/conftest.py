from datetime import datetime

import pytest

from stwindow.records import PointRecord, transform_raw_record

# Raw (time index, X, Y) rows in the units of the original dataset.
# Day 10958 is 1989-12-31, 10959 is 1990-01-01 and 14611 is 2000-01-01.
RAW_FIRES = [
    (10959, 64.0, 19.5),
    (10958, 64.5, 20.0),
    (12000, 64.5, 20.0),
    (14610, 65.0, 20.5),
    (14611, 64.2, 19.7),
    (13000, 63.9, 20.0),
    (13000, 65.01, 20.0),
    (13000, 64.4, 19.49),
    (13000, 64.4, 20.51),
    (11500, 64.9, 19.6),
    (5000, 62.0, 18.0),
    (16000, 66.0, 21.0),
]


@pytest.fixture
def fires_records():
    """Transformed records with ids 1..n in raw order."""
    return [transform_raw_record(t, x, y, record_id=i) for i, (t, x, y) in enumerate(RAW_FIRES, start=1)]


@pytest.fixture
def boundary_records():
    """Records lying exactly on the bounds of the 1990s window."""
    return [
        PointRecord(id=1, x=6400000.0, y=1950000.0, time=datetime(1990, 1, 1)),
        PointRecord(id=2, x=6500000.0, y=2050000.0, time=datetime(1999, 12, 31, 23, 59, 59)),
        PointRecord(id=3, x=6450000.0, y=2000000.0, time=datetime(2000, 1, 1)),
        PointRecord(id=4, x=6450000.0, y=2000000.0, time=datetime(1989, 12, 31, 23, 59, 59)),
        PointRecord(id=5, x=6500000.0, y=2000000.0, time=datetime(1995, 6, 1)),
        PointRecord(id=6, x=6450000.0, y=2050000.0, time=datetime(1995, 6, 1)),
        PointRecord(id=7, x=6500000.000001, y=2000000.0, time=datetime(1995, 6, 1)),
        PointRecord(id=8, x=6450000.0, y=1949999.999999, time=datetime(1995, 6, 1)),
    ]


@pytest.fixture
def fires_csv(tmp_path):
    """RAW_FIRES written the way R's write.csv exports the dataset."""
    path = tmp_path / "fires.csv"
    lines = ['"","Time","X","Y"']
    lines += [f'"{i}",{t},{x},{y}' for i, (t, x, y) in enumerate(RAW_FIRES, start=1)]
    path.write_text("\n".join(lines) + "\n")
    return path
