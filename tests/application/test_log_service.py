"""Tests for the process-wide logging facade."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from logkeeper.application import log_service
from logkeeper.application.log_service import LogService, get_log_service, set_log_service
from logkeeper.config.settings import LoggerSettings
from logkeeper.domain.levels import LogLevel
from logkeeper.features.sinks import SqliteLogSink


@pytest.fixture
def service(sync_settings: LoggerSettings) -> LogService:
    return LogService(sync_settings, echo_to_console=False)


def _rows(path: Path) -> list[tuple[str, str]]:
    return [
        (line.split(",", 2)[1], line.split(",", 2)[2])
        for line in path.read_text(encoding="utf-8").splitlines()
    ]


def test_log_functions_write_expected_levels(service: LogService) -> None:
    _ = service.log_message("started")
    _ = service.log_message("went wrong", is_error=True)
    _ = service.log_warning("careful")
    _ = service.log_fatal_error("stopping", RuntimeError("boom"))

    assert _rows(service.current_log_file_path) == [
        ("INFO", "started"),
        ("ERROR", "went wrong"),
        ("WARN", "careful"),
        ("FATAL", "stopping,RuntimeError: boom"),
    ]
    assert service.most_recent_error_message == "stopping"


def test_threshold_and_write_to_log_flag(service: LogService) -> None:
    service.set_threshold("warn")

    assert service.log_message("quiet") is False
    assert service.log_debug("quieter") is False
    assert service.log_message("console only", is_error=True, write_to_log=False) is False
    assert service.log_error("loud") is True

    assert _rows(service.current_log_file_path) == [("ERROR", "loud")]
    assert service.threshold is LogLevel.WARN


def test_write_failures_never_escape(
    service: LogService, mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level("ERROR", logger="logkeeper")
    _ = mocker.patch.object(service.file_logger, "log", side_effect=OSError("disk gone"))

    assert service.log_error("important") is False
    assert "Error logging errors; log message: important" in caplog.text


def test_archive_failures_never_escape(
    service: LogService, mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level("ERROR", logger="logkeeper")
    _ = mocker.patch.object(
        service.file_logger,
        "archive_old_log_files_now",
        side_effect=PermissionError(13, "Permission denied"),
    )

    report = service.archive_old_log_files_now()

    assert not report.archived_years
    assert any("Permission denied" in warning for warning in report.warnings)
    assert "Error archiving old log files" in caplog.text


def test_archive_reports_unreadable_year_through_the_service(
    service: LogService,
    log_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level("ERROR", logger="logkeeper")
    locked = log_dir / "2020"
    locked.mkdir()
    _ = (locked / "app_2020-01-01.txt").write_text("old\n", encoding="utf-8")
    original_iterdir = Path.iterdir

    def _deny_locked(self: Path):
        if self == locked:
            raise PermissionError(13, "Permission denied", str(self))
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", _deny_locked)

    report = service.archive_old_log_files_now()

    assert 2020 in report.failed_years
    assert "Failed to archive log files for 2020" in caplog.text


def test_console_echo_goes_through_diagnostics_logger(
    sync_settings: LoggerSettings, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level("DEBUG", logger="logkeeper")
    echoing = LogService(sync_settings, echo_to_console=True)

    _ = echoing.log_warning("watch out")
    _ = echoing.log_error("failed", ValueError("bad"))

    records = [(r.levelname, r.getMessage()) for r in caplog.records if r.name == "logkeeper"]
    assert ("WARNING", "watch out") in records
    assert ("ERROR", "failed: bad") in records


def test_subscribers_are_notified_and_isolated(
    service: LogService, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level("ERROR", logger="logkeeper")
    received: list[tuple[str, LogLevel]] = []

    def broken(message: str, level: LogLevel) -> None:
        raise RuntimeError(f"{message} {level}")

    service.add_message_logged_subscriber(broken)
    service.add_message_logged_subscriber(lambda m, lvl: received.append((m, lvl)))

    _ = service.log_warning("hello")

    assert received == [("hello", LogLevel.WARN)]
    assert "subscriber" in caplog.text
    assert service.remove_message_logged_subscriber(broken) is True
    assert service.remove_message_logged_subscriber(broken) is False


def test_reset_to_default_restores_name_and_threshold(service: LogService, log_dir: Path) -> None:
    _ = service.change_base_name("Custom", append_date=False)
    service.set_threshold(LogLevel.FATAL)

    service.reset_to_default()

    assert service.threshold is LogLevel.INFO
    assert service.current_log_file_path.parent == log_dir
    assert service.current_log_file_path.name.startswith("logkeeper_log_")


def test_create_file_logger_sets_name_and_threshold(service: LogService, log_dir: Path) -> None:
    file_logger = service.create_file_logger("Worker", LogLevel.DEBUG)

    _ = service.log_debug("detail")

    assert file_logger is service.file_logger
    assert service.current_log_file_path.parent == log_dir
    assert service.current_log_file_path.name.startswith("Worker_")
    assert _rows(service.current_log_file_path) == [("DEBUG", "detail")]


def test_database_routing_and_offline_mode(service: LogService) -> None:
    sink = SqliteLogSink(":memory:")
    _ = service.create_db_logger(sink, "host:test", LogLevel.INFO)

    _ = service.log_warning("to both", to_database=True)
    service.offline_mode = True
    _ = service.log_warning("file only", to_database=True)
    assert service.flush_pending_messages() is True

    assert sink.fetch_entries() == [("host:test", "Warn", "to both")]
    assert [m for _, m in _rows(service.current_log_file_path)] == ["to both", "file only"]
    service.shutdown()
    assert service.db_logger is None


def test_reconfigure_switches_settings(service: LogService, tmp_path: Path) -> None:
    other_dir = tmp_path / "other"
    service.reconfigure(LoggerSettings(log_directory=other_dir, base_name="moved", queued=False))

    _ = service.log_message("after")

    assert service.current_log_file_path.parent == other_dir
    assert _rows(service.current_log_file_path) == [("INFO", "after")]


def test_module_functions_use_the_default_service(service: LogService) -> None:
    assert set_log_service(service) is None
    log_service.set_threshold(LogLevel.DEBUG)

    _ = log_service.log_debug("via module")
    _ = log_service.log_error("module error")

    assert log_service.flush_pending_messages() is True
    assert log_service.current_log_file_path() == service.current_log_file_path
    assert log_service.most_recent_error_message() == "module error"
    assert _rows(service.current_log_file_path) == [("DEBUG", "via module"), ("ERROR", "module error")]

    log_service.shutdown()
    assert set_log_service(None) is None


def test_get_log_service_builds_from_config(tmp_path: Path) -> None:
    service = get_log_service()

    assert get_log_service() is service
    assert service.file_logger.queued is True
    assert service.current_log_file_path.parent == (tmp_path / "default_logs").resolve()
