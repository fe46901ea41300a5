"""Tests for fixed-name log rolling."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

from logkeeper.features.writing import roll_log_files

_TOMORROW = date.today() + timedelta(days=1)


def test_missing_or_fresh_file_is_left_alone(tmp_path: Path) -> None:
    current = tmp_path / "app.txt"
    assert roll_log_files(current, _TOMORROW, 3) == 0

    _ = current.write_text("today\n", encoding="utf-8")
    assert roll_log_files(current, date.today(), 3) == 0
    assert current.exists()


def test_copies_shift_and_oldest_is_deleted(tmp_path: Path) -> None:
    current = tmp_path / "app.txt"
    _ = current.write_text("current", encoding="utf-8")
    _ = (tmp_path / "app.txt.1").write_text("one", encoding="utf-8")
    _ = (tmp_path / "app.txt.2").write_text("two", encoding="utf-8")

    renamed = roll_log_files(current, _TOMORROW, 2)

    assert renamed == 2
    assert not current.exists()
    assert (tmp_path / "app.txt.1").read_text(encoding="utf-8") == "current"
    assert (tmp_path / "app.txt.2").read_text(encoding="utf-8") == "one"
    assert not (tmp_path / "app.txt.3").exists()


def test_max_rolled_files_has_a_floor_of_one(tmp_path: Path) -> None:
    current = tmp_path / "app.txt"
    _ = current.write_text("current", encoding="utf-8")
    _ = (tmp_path / "app.txt.1").write_text("one", encoding="utf-8")

    _ = roll_log_files(current, _TOMORROW, 0)

    assert (tmp_path / "app.txt.1").read_text(encoding="utf-8") == "current"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["app.txt.1"]
