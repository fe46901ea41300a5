"""Rename fixed-name log files (``name.txt`` → ``name.txt.1`` …) once per day."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from logkeeper.platform.logging import logger


def _rolled_path(path: Path, suffix: int) -> Path:
    return path.with_name(f"{path.name}.{suffix}")


def roll_log_files(current_log_file: Path, today: date, max_rolled_log_files: int) -> int:
    """Shift old copies of ``current_log_file`` and return how many were renamed.

    Nothing happens when the file does not exist or was modified today. The
    copy that would exceed ``max_rolled_log_files`` (minimum 1) is deleted.
    Failures are logged per file and never raised.
    """

    try:
        if not current_log_file.exists():
            return 0
        modified = datetime.fromtimestamp(current_log_file.stat().st_mtime).date()
    except OSError as exc:
        logger.error("Error checking log file %s before rolling: %s", current_log_file, exc)
        return 0

    if modified >= today:
        return 0

    keep = max(1, max_rolled_log_files)
    chain: list[Path] = [current_log_file]
    while len(chain) <= keep and _rolled_path(current_log_file, len(chain)).exists():
        chain.append(_rolled_path(current_log_file, len(chain)))

    renamed = 0
    # Walk from the oldest copy so each rename lands on a free name
    for index in range(len(chain) - 1, -1, -1):
        source = chain[index]
        suffix = index + 1
        try:
            if suffix > keep:
                source.unlink()
                continue
            target = _rolled_path(current_log_file, suffix)
            if target.exists():
                logger.error("Existing old log file will be overwritten: %s", target)
                target.unlink()
            _ = source.rename(target)
            renamed += 1
        except OSError as exc:
            logger.error("Error rolling old log file %s: %s", source, exc)

    if renamed:
        logger.debug("Rolled %d old log file(s) in %s", renamed, current_log_file.parent)
    return renamed


__all__ = ["roll_log_files"]
