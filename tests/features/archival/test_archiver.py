"""
Summary: End-to-end archive passes over temporary log directories.
Why: Archives must be complete or absent, and repeated passes must be no-ops.
"""

from __future__ import annotations

import zipfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from logkeeper.config.settings import LoggerSettings
from logkeeper.features.archival import (
    ArchiveState,
    LogArchiver,
    archive_old_log_files,
    is_year_eligible,
)

_TODAY = date(2024, 6, 1)


def _archiver(log_dir: Path, today: date = _TODAY, **kwargs: object) -> LogArchiver:
    return LogArchiver(log_dir, clock=lambda: today, **kwargs)  # pyright: ignore[reportArgumentType]


def _make_year_dir(log_dir: Path, year: int, count: int = 3) -> list[str]:
    year_dir = log_dir / str(year)
    year_dir.mkdir()
    names = [f"app_{year}-01-{day:02d}.txt" for day in range(1, count + 1)]
    for name in names:
        _ = (year_dir / name).write_text(f"log {name}\n", encoding="utf-8")
    return names


def test_year_eligibility_boundary() -> None:
    threshold = 90
    boundary = date(2024, 1, 1) + timedelta(days=threshold)

    assert is_year_eligible(2023, boundary - timedelta(days=1), threshold) is False
    assert is_year_eligible(2023, boundary, threshold) is True
    assert is_year_eligible(2024, date(2024, 12, 31), 0) is False
    assert is_year_eligible(2030, _TODAY, 0) is False


def test_threshold_boundary_through_the_archiver(log_dir: Path) -> None:
    _ = _make_year_dir(log_dir, 2023)
    boundary = date(2024, 1, 1) + timedelta(days=90)

    first = _archiver(log_dir, boundary - timedelta(days=1)).run()
    assert first.skipped_years == [2023]
    assert (log_dir / "2023").is_dir()

    second = _archiver(log_dir, boundary).run()
    assert second.archived_years == [2023]
    assert (log_dir / "Archived" / "2023.zip").is_file()


def test_legacy_loose_files_end_up_in_one_archive(log_dir: Path) -> None:
    names: list[str] = []
    for i in range(40):
        day = date(2022, 1, 3) + timedelta(days=i * 7)
        name = f"app_{day:%m-%d-%Y}.txt"
        _ = (log_dir / name).write_text(f"entry {i}\n", encoding="utf-8")
        names.append(name)

    report = _archiver(log_dir).run()

    archive = log_dir / "Archived" / "2022.zip"
    assert report.success
    assert len(report.relocated_files) == 40
    assert report.archived_years == [2022]
    assert not (log_dir / "2022").exists()
    with zipfile.ZipFile(archive) as bundle:
        assert sorted(bundle.namelist()) == sorted(names)
        assert bundle.read(names[0]) == b"entry 0\n"
    assert [job.state for job in report.jobs] == [ArchiveState.ARCHIVED]


def test_stray_year_archive_is_moved_not_recompressed(log_dir: Path) -> None:
    stray = log_dir / "2021.zip"
    with zipfile.ZipFile(stray, "w") as bundle:
        bundle.writestr("app_2021-05-05.txt", "old\n")
    original = stray.read_bytes()

    report = _archiver(log_dir).run()

    moved = log_dir / "Archived" / "2021.zip"
    assert report.moved_archives == [moved]
    assert not stray.exists()
    assert moved.read_bytes() == original


def test_second_pass_is_a_no_op(log_dir: Path) -> None:
    _ = _make_year_dir(log_dir, 2022)
    first = _archiver(log_dir).run()
    archive = log_dir / "Archived" / "2022.zip"
    snapshot = archive.read_bytes()

    second = _archiver(log_dir).run()

    assert first.did_work
    assert not second.did_work
    assert second.success
    assert archive.read_bytes() == snapshot


def test_existing_archive_skips_year_and_keeps_directory(log_dir: Path) -> None:
    _ = _make_year_dir(log_dir, 2022)
    (log_dir / "Archived").mkdir()
    _ = (log_dir / "Archived" / "2022.zip").write_bytes(b"existing")

    report = _archiver(log_dir).run()

    assert report.skipped_years == [2022]
    assert any("already been archived" in warning for warning in report.warnings)
    assert len(list((log_dir / "2022").iterdir())) == 3
    assert (log_dir / "Archived" / "2022.zip").read_bytes() == b"existing"


def test_directory_with_subdirectories_is_kept(log_dir: Path) -> None:
    _ = _make_year_dir(log_dir, 2021)
    (log_dir / "2021" / "extra").mkdir()

    report = _archiver(log_dir).run()

    assert report.archived_years == [2021]
    assert (log_dir / "2021" / "extra").is_dir()
    assert not any(path.is_file() for path in (log_dir / "2021").iterdir())
    assert any("still contains subdirectories" in warning for warning in report.warnings)


def test_failed_bundle_leaves_source_untouched(log_dir: Path, mocker: MockerFixture) -> None:
    names = _make_year_dir(log_dir, 2020)
    _ = _make_year_dir(log_dir, 2021)

    def _fail_for_2020(files: list[Path], destination: Path) -> int:
        _ = destination.write_bytes(b"half written")
        if destination.name.startswith("2020"):
            raise OSError("disk full")
        with zipfile.ZipFile(destination, "w") as bundle:
            for source in files:
                bundle.write(source, arcname=source.name)
        return len(files)

    _ = mocker.patch(
        "logkeeper.features.archival.bundler._write_archive", side_effect=_fail_for_2020
    )

    report = _archiver(log_dir).run()

    assert not report.success
    assert "disk full" in report.failed_years[2020]
    assert report.archived_years == [2021]
    assert sorted(p.name for p in (log_dir / "2020").iterdir()) == sorted(names)
    assert not (log_dir / "Archived" / "2020.zip").exists()
    assert not list((log_dir / "Archived").glob("*.partial"))


def test_unreadable_year_directory_is_reported_and_others_continue(
    log_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _ = _make_year_dir(log_dir, 2020)
    _ = _make_year_dir(log_dir, 2021)
    original_iterdir = Path.iterdir

    def _deny_2020(self: Path):
        if self.name == "2020":
            raise PermissionError(13, "Permission denied", str(self))
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", _deny_2020)

    report = _archiver(log_dir).run()

    assert "Permission denied" in report.failed_years[2020]
    assert report.archived_years == [2021]
    job_2020 = next(job for job in report.jobs if job.year == 2020)
    assert job_2020.state is ArchiveState.UNARCHIVED
    assert not (log_dir / "Archived" / "2020.zip").exists()
    assert (log_dir / "Archived" / "2021.zip").is_file()


def test_unreadable_log_directory_yields_warnings(
    log_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _ = _make_year_dir(log_dir, 2020)
    original_iterdir = Path.iterdir

    def _deny_root(self: Path):
        if self == log_dir:
            raise PermissionError(13, "Permission denied", str(self))
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", _deny_root)

    report = _archiver(log_dir).run()

    assert report.archived_years == []
    assert (log_dir / "2020").is_dir()
    assert any("Error listing log files" in warning for warning in report.warnings)
    assert any("Error listing old log directories" in warning for warning in report.warnings)
    assert any("Error looking for zipped log files" in warning for warning in report.warnings)


def test_entry_count_mismatch_is_a_failure(log_dir: Path, mocker: MockerFixture) -> None:
    _ = _make_year_dir(log_dir, 2020)
    _ = mocker.patch("logkeeper.features.archival.bundler._write_archive", return_value=1)

    report = _archiver(log_dir).run()

    assert "zip file has 1 files" in report.failed_years[2020]
    assert len(list((log_dir / "2020").iterdir())) == 3


def test_zipping_can_be_disabled(log_dir: Path) -> None:
    _ = (log_dir / "app_2022-02-02.txt").write_text("x\n", encoding="utf-8")

    report = _archiver(log_dir, zip_old_log_directories=False).run()

    assert report.relocated_files == [log_dir / "2022" / "app_2022-02-02.txt"]
    assert not (log_dir / "Archived").exists()


def test_current_year_and_missing_directory(log_dir: Path, tmp_path: Path) -> None:
    _ = _make_year_dir(log_dir, 2024)

    jobs = _archiver(log_dir).plan_jobs()
    assert [(job.year, job.state) for job in jobs] == [(2024, ArchiveState.SKIPPED)]
    assert not _archiver(tmp_path / "absent").run().did_work


@pytest.mark.parametrize("archive_name", ["Archived", "Old"])
def test_archive_old_log_files_uses_settings(log_dir: Path, archive_name: str) -> None:
    _ = _make_year_dir(log_dir, 2019)
    settings = LoggerSettings(log_directory=log_dir, archive_directory_name=archive_name)

    report = archive_old_log_files(log_dir, settings, clock=lambda: _TODAY)

    assert report.archived_years == [2019]
    assert (log_dir / archive_name / "2019.zip").is_file()
