"""Where: src/logkeeper/features/archival/bundler.py
What: Compress one year directory into a flat ZIP and remove the originals.
Why: An archive must be either fully present or absent; never partial.
Assumptions: - Only regular files directly inside the directory are bundled.
Trade-offs: - The archive is written beside its destination then renamed with ``os.replace``.
"""

from __future__ import annotations

import os
import zipfile
from pathlib import Path
from typing import Final

from logkeeper.core.filesystem import ensure_parent_directory
from logkeeper.errors import ArchiveError
from logkeeper.platform.logging import logger

from .models import ArchiveJob, ArchiveState

PARTIAL_SUFFIX: Final[str] = ".partial"


def _partial_path(target: Path) -> Path:
    return target.with_name(target.name + PARTIAL_SUFFIX)


def _write_archive(files: list[Path], destination: Path) -> int:
    """Write ``files`` (flattened) to ``destination`` and return the verified entry count."""

    with zipfile.ZipFile(
        destination, "w", compression=zipfile.ZIP_DEFLATED, allowZip64=True
    ) as archive:
        for source in files:
            archive.write(source, arcname=source.name)

    with zipfile.ZipFile(destination) as archive:
        corrupt = archive.testzip()
        if corrupt is not None:
            raise zipfile.BadZipFile(f"CRC check failed for {corrupt}")
        return len(archive.infolist())


def bundle_year_directory(job: ArchiveJob) -> int:
    """Create ``job.target_archive_path`` from the files in ``job.source_directory``.

    Returns:
        int: Number of files written to the archive.

    Raises:
        ArchiveError: If the archive cannot be created or verified. No archive
            file is left behind and the source directory is untouched.
    """

    job.state = ArchiveState.BUNDLING
    target = job.target_archive_path
    partial = _partial_path(target)

    try:
        files = sorted(path for path in job.source_directory.iterdir() if path.is_file())
        _ = ensure_parent_directory(target)
        entry_count = _write_archive(files, partial)
        if entry_count < len(files):
            raise ArchiveError(
                job.year,
                f"zip file has {entry_count} files, but the directory has {len(files)}",
            )
        os.replace(partial, target)
    except ArchiveError:
        job.state = ArchiveState.UNARCHIVED
        raise
    except (OSError, zipfile.BadZipFile) as exc:
        job.state = ArchiveState.UNARCHIVED
        raise ArchiveError(job.year, f"error creating zip file {target}: {exc}") from exc
    finally:
        partial.unlink(missing_ok=True)

    job.file_count = entry_count
    job.state = ArchiveState.ARCHIVED
    logger.info(
        "Compressed %d files in %s to create %s", entry_count, job.source_directory, target
    )
    return entry_count


def remove_bundled_files(job: ArchiveJob) -> list[str]:
    """Delete the bundled files and, when empty, the directory itself.

    The archive's modification time is set to the newest deleted file.

    Returns:
        list[str]: Warning messages; empty on full success.
    """

    warnings: list[str] = []
    newest_mtime: float | None = None

    try:
        for old_log_file in job.source_directory.iterdir():
            if not old_log_file.is_file():
                continue
            mtime = old_log_file.stat().st_mtime
            if newest_mtime is None or mtime > newest_mtime:
                newest_mtime = mtime
            old_log_file.unlink()
    except OSError as exc:
        warnings.append(
            f"Error deleting old log files after successfully creating the zip file: {exc}"
        )
        return warnings

    if newest_mtime is not None:
        try:
            os.utime(job.target_archive_path, (newest_mtime, newest_mtime))
        except OSError as exc:
            logger.debug("Could not update timestamp of %s: %s", job.target_archive_path, exc)

    try:
        if any(job.source_directory.iterdir()):
            warnings.append(
                f"Not removing {job.source_directory} since it still contains subdirectories"
            )
        else:
            job.source_directory.rmdir()
    except OSError as exc:
        warnings.append(f"Error removing empty subdirectory {job.source_directory}: {exc}")

    return warnings


__all__ = ["PARTIAL_SUFFIX", "bundle_year_directory", "remove_bundled_files"]
