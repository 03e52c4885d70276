"""Shared test fixtures for chartrace tests."""

import pytest

from chartrace.models import RawRow
from chartrace.normalize import normalize_rows

CSV_HEADER = "date,rank,song,artist,last-week,peak-rank,weeks-on-board\n"


@pytest.fixture()
def make_records():
    """Factory: (week, rank, title, artist) tuples -> normalized records."""

    def _make(rows):
        raw = [
            RawRow(week=week, rank=str(rank), title=title, artist=artist)
            for week, rank, title, artist in rows
        ]
        return normalize_rows(raw)

    return _make


@pytest.fixture()
def chart_csv(tmp_path):
    """A small Billboard-style chart dump with a missing week and a footer row."""
    path = tmp_path / "chart.csv"
    path.write_text(
        CSV_HEADER
        + "2024-08-03,1,Espresso,Sabrina Carpenter,2,1,16\n"
        + "2024-08-03,2,A Bar Song,Shaboozey,1,1,17\n"
        + "2024-08-03,3,Not Like Us,Kendrick Lamar,,1,13\n"
        + "2024-08-17,1,A Bar Song,Shaboozey,2,1,19\n"
        + "2024-08-17,2,Espresso,Sabrina Carpenter,1,1,18\n"
        + "2024-08-17,3,Die With A Smile,Lady Gaga & Bruno Mars,NEW,3,1\n"
        + "Source: Billboard,,,,,,\n"
    )
    return path


@pytest.fixture()
def two_year_records(make_records):
    """Records spanning a year boundary plus a carry-in window before 2024."""
    return make_records([
        ("2023-12-16", 1, "Old Hit", "Veteran"),
        ("2023-12-23", 1, "Old Hit", "Veteran"),
        ("2023-12-23", 2, "Riser", "Newcomer"),
        ("2023-12-30", 2, "Old Hit", "Veteran"),
        ("2023-12-30", 1, "Riser", "Newcomer"),
        ("2024-01-06", 1, "Riser", "Newcomer"),
        ("2024-01-06", 2, "Fresh", "Debut"),
        ("2024-01-13", 1, "Fresh", "Debut"),
        ("2024-01-13", 2, "Riser", "Newcomer"),
    ])
