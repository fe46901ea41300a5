"""Tests for the database sink, its writer adapter, and the database logger."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from logkeeper.application.file_logger import FileLogger
from logkeeper.domain.entry import LogEntry
from logkeeper.domain.levels import LogLevel
from logkeeper.features.sinks import DatabaseLogger, DatabaseSinkWriter, SqliteLogSink
from logkeeper.features.sinks.database import DatabasePostError, default_module_name


@pytest.fixture
def sink() -> SqliteLogSink:
    return SqliteLogSink(":memory:")


def test_sqlite_sink_stores_rows_in_order(sink: SqliteLogSink) -> None:
    assert sink.post_entry("Info", "first", "host:app") is True
    assert sink.post_entry("Error", "second", "host:app") is True

    assert sink.fetch_entries() == [("host:app", "Info", "first"), ("host:app", "Error", "second")]
    sink.close()


def test_sqlite_sink_creates_parent_directory(tmp_path: Path) -> None:
    db_path = tmp_path / "db" / "logs.sqlite"
    file_sink = SqliteLogSink(db_path)
    assert file_sink.post_entry("Warn", "persisted", "me") is True
    file_sink.close()
    assert db_path.is_file()


def test_sink_writer_formats_type_and_exception(mocker: MockerFixture) -> None:
    fake_sink = mocker.Mock()
    fake_sink.post_entry.return_value = True
    writer = DatabaseSinkWriter(fake_sink, "host:app")

    try:
        raise ValueError("bad value")
    except ValueError as exc:
        writer.write(LogEntry.create(LogLevel.ERROR, "failed", exc))

    fake_sink.post_entry.assert_called_once_with("Error", "failed; ValueError: bad value", "host:app")


def test_sink_writer_raises_when_rejected(mocker: MockerFixture) -> None:
    fake_sink = mocker.Mock()
    fake_sink.post_entry.return_value = False
    writer = DatabaseSinkWriter(fake_sink, "host:app", initial_caps_log_types=False)

    with pytest.raises(DatabasePostError):
        writer.write(LogEntry.create(LogLevel.WARN, "nope"))
    fake_sink.post_entry.assert_called_once_with("WARN", "nope", "host:app")


def test_database_logger_filters_queues_and_echoes(sink: SqliteLogSink, log_dir: Path) -> None:
    file_logger = FileLogger("db_echo", directory=log_dir, queued=False, threshold=LogLevel.FATAL)
    db_logger = DatabaseLogger(
        sink, "host:app", threshold=LogLevel.WARN, file_logger=file_logger
    )

    assert db_logger.info("ignored") is False
    assert db_logger.warn("careful") is True
    assert db_logger.error("broken") is True
    assert db_logger.flush() is True

    assert sink.fetch_entries() == [("host:app", "Warn", "careful"), ("host:app", "Error", "broken")]
    lines = file_logger.current_log_file_path.read_text(encoding="utf-8").splitlines()
    assert [line.split(",")[1] for line in lines] == ["WARN", "ERROR"]
    assert file_logger.most_recent_error_message == "broken"
    db_logger.close()


def test_database_logger_counts_rejected_posts(mocker: MockerFixture) -> None:
    fake_sink = mocker.Mock()
    fake_sink.post_entry.return_value = False
    db_logger = DatabaseLogger(fake_sink, "host:app")

    _ = db_logger.error("lost")
    assert db_logger.flush() is True
    assert db_logger.writer.failed_writes == 1
    db_logger.close()


def test_default_module_name_includes_program() -> None:
    assert default_module_name().endswith(":logkeeper")
