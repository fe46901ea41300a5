"""Where: src/logkeeper/config/settings.py
What: Logger settings persisted as TOML and their defaults.
Why: One validated object feeds the file logger, queued writer, and archiver.
Assumptions: - Missing keys fall back to defaults; unknown keys are ignored.
"""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Final

from logkeeper.core.filesystem import write_text_file
from logkeeper.domain.formatting import DEFAULT_TIMESTAMP_MODE, TimestampMode
from logkeeper.domain.levels import LogLevel
from logkeeper.errors import ConfigurationError
from logkeeper.platform.logging import logger

from .paths import default_config_path, default_log_dir


DEFAULT_BASE_NAME: Final[str] = "logkeeper_log"
DEFAULT_FLUSH_TIMEOUT_SECONDS: Final[float] = 5.0
DEFAULT_MAX_ROLLED_LOG_FILES: Final[int] = 5
DEFAULT_ARCHIVE_THRESHOLD_DAYS: Final[int] = 90
DEFAULT_OLD_LOG_FILE_AGE_DAYS: Final[int] = 32
ARCHIVED_LOG_FILES_DIRECTORY_NAME: Final[str] = "Archived"


_SCALAR_FIELD_TYPES: Final[dict[str, tuple[type, ...]]] = {
    "base_name": (str,),
    "append_date": (bool,),
    "use_local_time": (bool,),
    "queued": (bool,),
    "flush_timeout_seconds": (int, float),
    "max_rolled_log_files": (int,),
    "archive_threshold_days": (int,),
    "archive_directory_name": (str,),
    "zip_old_log_directories": (bool,),
    "old_log_file_age_days": (int,),
}


def _path_field(default: Path | None = None) -> Any:
    """Create a dataclass field flagged for ``str`` → ``Path`` conversion."""
    return field(default=default, metadata={"path": True})


@dataclass(slots=True)
class LoggerSettings:
    """Settings for the file logger and archiver."""

    # Directory holding the active log files; None means default_log_dir()
    log_directory: Path | None = _path_field()
    base_name: str = DEFAULT_BASE_NAME
    append_date: bool = True
    threshold: LogLevel = LogLevel.INFO
    timestamp_mode: TimestampMode = DEFAULT_TIMESTAMP_MODE
    use_local_time: bool = True

    # Writer strategy
    queued: bool = True
    flush_timeout_seconds: float = DEFAULT_FLUSH_TIMEOUT_SECONDS
    max_rolled_log_files: int = DEFAULT_MAX_ROLLED_LOG_FILES

    # Archival
    archive_threshold_days: int = DEFAULT_ARCHIVE_THRESHOLD_DAYS
    archive_directory_name: str = ARCHIVED_LOG_FILES_DIRECTORY_NAME
    zip_old_log_directories: bool = True
    old_log_file_age_days: int = DEFAULT_OLD_LOG_FILE_AGE_DAYS

    def __post_init__(self) -> None:
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)
            elif value is not None and not isinstance(value, Path):
                raise ConfigurationError(f"{f.name} must be a path string, got {value!r}")

        for name, expected in _SCALAR_FIELD_TYPES.items():
            value = getattr(self, name)
            # bool is an int subclass; only bool fields accept it
            if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
                raise ConfigurationError(f"{name} has the wrong type: {value!r}")

        try:
            self.threshold = LogLevel.parse(self.threshold)
            self.timestamp_mode = TimestampMode.from_user_input(self.timestamp_mode)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        if self.flush_timeout_seconds <= 0:
            raise ConfigurationError("flush_timeout_seconds must be positive")
        if self.archive_threshold_days < 0:
            raise ConfigurationError("archive_threshold_days cannot be negative")
        if self.old_log_file_age_days < 0:
            raise ConfigurationError("old_log_file_age_days cannot be negative")
        if not self.archive_directory_name.strip():
            raise ConfigurationError("archive_directory_name cannot be empty")
        self.max_rolled_log_files = max(1, self.max_rolled_log_files)

    @property
    def resolved_log_directory(self) -> Path:
        """Configured log directory, or the portable default."""

        return self.log_directory if self.log_directory is not None else default_log_dir()

    def to_dict(self) -> dict[str, Any]:
        """Return a TOML-friendly mapping of the settings."""

        raw = asdict(self)
        raw["log_directory"] = str(self.log_directory) if self.log_directory else ""
        raw["threshold"] = self.threshold.name
        raw["timestamp_mode"] = self.timestamp_mode.value
        return raw

    def save(self, path: Path | None = None) -> Path:
        """Persist settings as commented TOML and return the target path."""

        target = path or default_config_path()
        try:
            write_text_file(target, _render_toml(self.to_dict()))
        except OSError as exc:
            logger.error("Failed to save logger settings: %s", exc)
            raise
        logger.debug("Logger settings saved to %s", target)
        return target


def _format_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, Path)):
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return str(value)


def _render_toml(config: dict[str, Any]) -> str:
    lines: list[str] = ["# logkeeper settings", ""]

    lines.append("# Directory for active log files (empty uses <repo_root>/logs)")
    lines.append(f"log_directory = {_format_toml_value(config['log_directory'])}")
    lines.append("# Base name; today's date is appended when append_date is true")
    lines.append(f"base_name = {_format_toml_value(config['base_name'])}")
    lines.append(f"append_date = {_format_toml_value(config['append_date'])}")
    lines.append("# One of DEBUG, INFO, WARN, ERROR, FATAL")
    lines.append(f"threshold = {_format_toml_value(config['threshold'])}")
    lines.append(f"timestamp_mode = {_format_toml_value(config['timestamp_mode'])}")
    lines.append(f"use_local_time = {_format_toml_value(config['use_local_time'])}")
    lines.append("")

    lines.append("# Write through a background queue")
    lines.append(f"queued = {_format_toml_value(config['queued'])}")
    lines.append(f"flush_timeout_seconds = {_format_toml_value(config['flush_timeout_seconds'])}")
    lines.append("# Old copies kept when append_date is false")
    lines.append(f"max_rolled_log_files = {_format_toml_value(config['max_rolled_log_files'])}")
    lines.append("")

    lines.append("# Year directories are zipped this many days after January 1 of the next year")
    lines.append(f"archive_threshold_days = {_format_toml_value(config['archive_threshold_days'])}")
    lines.append(f"archive_directory_name = {_format_toml_value(config['archive_directory_name'])}")
    lines.append(f"zip_old_log_directories = {_format_toml_value(config['zip_old_log_directories'])}")
    lines.append(f"old_log_file_age_days = {_format_toml_value(config['old_log_file_age_days'])}")
    lines.append("")

    return "\n".join(lines)


def load_settings(path: Path | None = None) -> LoggerSettings:
    """Load settings from ``path`` (or the default config path).

    Returns defaults when the file does not exist.

    Raises:
        ConfigurationError: If the file is not valid TOML or holds invalid values.
    """

    config_file = path or default_config_path()
    if not config_file.exists():
        logger.debug("No logger settings at %s; using defaults", config_file)
        return LoggerSettings()

    try:
        with open(config_file, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {config_file}: {exc}") from exc

    known = {f.name for f in fields(LoggerSettings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("Ignoring unknown logger settings in %s: %s", config_file, ", ".join(unknown))

    try:
        settings = LoggerSettings(**{key: value for key, value in raw.items() if key in known})
    except TypeError as exc:
        raise ConfigurationError(f"Invalid logger settings in {config_file}: {exc}") from exc

    logger.debug("Logger settings loaded from %s", config_file)
    return settings


__all__ = [
    "ARCHIVED_LOG_FILES_DIRECTORY_NAME",
    "DEFAULT_ARCHIVE_THRESHOLD_DAYS",
    "DEFAULT_BASE_NAME",
    "DEFAULT_FLUSH_TIMEOUT_SECONDS",
    "DEFAULT_MAX_ROLLED_LOG_FILES",
    "DEFAULT_OLD_LOG_FILE_AGE_DAYS",
    "LoggerSettings",
    "load_settings",
]
