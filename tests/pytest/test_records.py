from datetime import datetime

import pytest

from stwindow.dataset import load_fires_csv
from stwindow.records import COORDINATE_SCALE, EPOCH_DATE, PointRecord, time_index_to_datetime, transform_raw_record


def test_time_index_one_is_epoch():
    assert time_index_to_datetime(1) == datetime(EPOCH_DATE.year, EPOCH_DATE.month, EPOCH_DATE.day)


def test_time_index_crosses_leap_year():
    # 1960 is a leap year
    assert time_index_to_datetime(366) == datetime(1960, 12, 31)
    assert time_index_to_datetime(367) == datetime(1961, 1, 1)


def test_time_index_decade_boundaries():
    assert time_index_to_datetime(10959) == datetime(1990, 1, 1)
    assert time_index_to_datetime(14611) == datetime(2000, 1, 1)


def test_time_index_accepts_float():
    assert time_index_to_datetime(10959.0) == datetime(1990, 1, 1)


def test_transform_raw_record_scales_coordinates():
    record = transform_raw_record(10959, 64.0, 19.5)
    assert record == PointRecord(x=64.0 * COORDINATE_SCALE, y=19.5 * COORDINATE_SCALE, time=datetime(1990, 1, 1))
    assert record.id is None


def test_transform_raw_record_keeps_id():
    assert transform_raw_record(1, 0.0, 0.0, record_id=42).id == 42


def test_point_record_is_immutable():
    record = PointRecord(x=1.0, y=2.0, time=datetime(1990, 1, 1))
    with pytest.raises(AttributeError):
        record.x = 3.0  # type: ignore[misc]


def test_load_fires_csv_with_row_names(tmp_path):
    csv_file = tmp_path / "fires.csv"
    csv_file.write_text('"","Time","X","Y"\n"1",10959,64,19.5\n"2",12000,64.5,20\n')

    records = load_fires_csv(csv_file)

    assert records == [
        PointRecord(x=6400000.0, y=1950000.0, time=datetime(1990, 1, 1)),
        PointRecord(x=6450000.0, y=2000000.0, time=time_index_to_datetime(12000)),
    ]


def test_load_fires_csv_case_insensitive_and_skips_blank_lines(tmp_path):
    csv_file = tmp_path / "fires.csv"
    csv_file.write_text("x,y,time\n64,19.5,10959\n\n65,20,10960\n")

    records = load_fires_csv(csv_file)

    assert [r.time for r in records] == [datetime(1990, 1, 1), datetime(1990, 1, 2)]
    assert records[1].x == 6500000.0


def test_load_fires_csv_missing_column(tmp_path):
    csv_file = tmp_path / "fires.csv"
    csv_file.write_text("Time,X\n1,2\n")

    with pytest.raises(ValueError, match="missing column"):
        load_fires_csv(csv_file)


def test_load_fires_csv_invalid_value_names_line(tmp_path):
    csv_file = tmp_path / "fires.csv"
    csv_file.write_text("Time,X,Y\n1,2,3\nabc,2,3\n")

    with pytest.raises(ValueError, match=":3:"):
        load_fires_csv(csv_file)


def test_load_fires_csv_empty_file(tmp_path):
    csv_file = tmp_path / "fires.csv"
    csv_file.write_text("")

    with pytest.raises(ValueError, match="empty"):
        load_fires_csv(csv_file)


def test_time_index_keeps_fraction_as_time_of_day():
    assert time_index_to_datetime(10959.5) == datetime(1990, 1, 1, 12)
    assert time_index_to_datetime(10959.25) == datetime(1990, 1, 1, 6)
