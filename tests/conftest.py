"""Shared pytest fixtures for logkeeper tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from logkeeper.application.log_service import set_log_service
from logkeeper.config.settings import LoggerSettings


@pytest.fixture(autouse=True)
def isolated_locations(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point config and default log locations at the test's temporary directory."""

    monkeypatch.setenv("LOGKEEPER_CONFIG", str(tmp_path / "config" / "logkeeper.toml"))
    monkeypatch.setenv("LOGKEEPER_LOG_DIR", str(tmp_path / "default_logs"))


@pytest.fixture(autouse=True)
def reset_default_service() -> Iterator[None]:
    """Shut down any process-wide service a test created."""

    yield None
    service = set_log_service(None)
    if service is not None:
        service.shutdown(timeout=1.0)


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary repository root for portable path detection."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")
    monkeypatch.delenv("LOGKEEPER_CONFIG", raising=False)
    monkeypatch.delenv("LOGKEEPER_LOG_DIR", raising=False)

    import logkeeper.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    return tmp_path


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Directory for managed log files."""

    directory = tmp_path / "logs"
    directory.mkdir()
    return directory


@pytest.fixture
def sync_settings(log_dir: Path) -> LoggerSettings:
    """Settings writing synchronously into ``log_dir``."""

    return LoggerSettings(log_directory=log_dir, queued=False)
