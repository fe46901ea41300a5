"""Configuration loading and default locations."""

from __future__ import annotations

from .paths import default_config_path, default_log_dir, resolve_overridable_path
from .settings import LoggerSettings, load_settings

__all__ = [
    "LoggerSettings",
    "default_config_path",
    "default_log_dir",
    "load_settings",
    "resolve_overridable_path",
]
