import io
import json
import sys

import pytest

from stwindow.cli import compare_subsets, load_points, query_window


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in ("SQLITE_DB_PATH", "POINTS_TABLE", "POINTS_SRID", "DB_NAME", "DB_HOST", "DB_USER", "DB_PORT", "DB_PASSWORD"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def loaded_db(tmp_path, fires_csv, monkeypatch):
    db_path = tmp_path / "fires.sqlite"
    monkeypatch.setattr(sys, "argv", ["stwindow-load-points", "--csv", str(fires_csv), "--db-backend", "sqlite", "--db-path", str(db_path)])
    load_points.main()
    return db_path


def _query(monkeypatch, db_path, *extra) -> str:
    out = io.StringIO()
    monkeypatch.setattr(sys, "argv", ["stwindow-query-window", "--db-backend", "sqlite", "--db-path", str(db_path), *extra])
    query_window.main(file=out)
    return out.getvalue()


def test_query_lines_output(monkeypatch, loaded_db):
    assert _query(monkeypatch, loaded_db, "--output-format", "lines").split() == ["1", "3", "4", "10"]


def test_query_json_output(monkeypatch, loaded_db):
    rows = json.loads(_query(monkeypatch, loaded_db, "--output-format", "json"))

    assert [row["id"] for row in rows] == [1, 3, 4, 10]
    assert rows[0] == {"id": 1, "x": 6400000.0, "y": 1950000.0, "time": "1990-01-01T00:00:00"}


def test_query_csv_output(monkeypatch, loaded_db):
    lines = _query(monkeypatch, loaded_db).splitlines()

    assert lines[0] == "id,x,y,time"
    assert lines[1] == "1,6400000.0,1950000.0,1990-01-01 00:00:00"
    assert len(lines) == 5


def test_query_custom_window(monkeypatch, loaded_db):
    output = _query(monkeypatch, loaded_db, "--output-format", "lines", "--time-min", "1973-01-01", "--time-max", "1974-01-01", "--x-min", "0", "--y-min", "0")
    assert output.split() == ["11"]


def test_query_inverted_window(monkeypatch, loaded_db):
    assert _query(monkeypatch, loaded_db, "--output-format", "lines", "--x-min", "10", "--x-max", "0") == ""


def test_query_output_file(monkeypatch, loaded_db, tmp_path):
    output_file = tmp_path / "subset.txt"
    _query(monkeypatch, loaded_db, "--output-format", "lines", "--output-file", str(output_file))
    assert output_file.read_text().split() == ["1", "3", "4", "10"]


def test_query_invalid_time_bound(monkeypatch, loaded_db):
    with pytest.raises(SystemExit) as exc_info:
        _query(monkeypatch, loaded_db, "--time-min", "nineties")
    assert exc_info.value.code == 1


def test_query_postgres_without_environment(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["stwindow-query-window"])
    with pytest.raises(SystemExit) as exc_info:
        query_window.main(file=io.StringIO())
    assert exc_info.value.code == 1


def test_load_points_missing_csv(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", ["stwindow-load-points", "--csv", str(tmp_path / "missing.csv"), "--db-backend", "sqlite"])
    with pytest.raises(SystemExit) as exc_info:
        load_points.main()
    assert exc_info.value.code == 1


def test_compare_existing_table(monkeypatch, loaded_db, capsys, tmp_path):
    plot_file = tmp_path / "comparison.png"
    monkeypatch.setattr(
        sys, "argv", ["stwindow-compare", "--db-backend", "sqlite", "--db-path", str(loaded_db), "--plot-file", str(plot_file)]
    )

    with pytest.raises(SystemExit) as exc_info:
        compare_subsets.main()

    assert exc_info.value.code == 0
    assert "matched=4" in capsys.readouterr().out
    assert plot_file.exists()


def test_compare_with_load_into_memory(monkeypatch, fires_csv, capsys):
    monkeypatch.setattr(sys, "argv", ["stwindow-compare", "--db-backend", "sqlite", "--csv", str(fires_csv), "--load"])

    with pytest.raises(SystemExit) as exc_info:
        compare_subsets.main()

    assert exc_info.value.code == 0
    assert "only_in_memory=0 only_delegated=0" in capsys.readouterr().out


def test_compare_load_requires_csv(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["stwindow-compare", "--db-backend", "sqlite", "--load"])

    with pytest.raises(SystemExit) as exc_info:
        compare_subsets.main()
    assert exc_info.value.code == 1


def test_query_offset_time_bound(monkeypatch, loaded_db):
    with pytest.raises(SystemExit) as exc_info:
        _query(monkeypatch, loaded_db, "--time-min", "1990-01-01T00:00:00+05:00")
    assert exc_info.value.code == 1


def test_query_unwritable_output_file(monkeypatch, loaded_db, tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        _query(monkeypatch, loaded_db, "--output-file", str(tmp_path / "missing_dir" / "subset.csv"))
    assert exc_info.value.code == 1
