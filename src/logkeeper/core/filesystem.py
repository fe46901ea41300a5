"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Final

HASH_CHUNK_SIZE: Final[int] = 64 * 1024


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def write_text_file(path: Path, content: str) -> None:
    """Persist textual content ensuring parent directories exist."""

    _ = ensure_parent_directory(path)
    _ = path.write_text(content, encoding="utf-8")


def calculate_file_hash(file_path: Path) -> str:
    """Calculate the SHA-1 hash of a file."""

    sha1_hash = hashlib.sha1()
    with open(file_path, "rb") as handle:
        for byte_block in iter(lambda: handle.read(HASH_CHUNK_SIZE), b""):
            sha1_hash.update(byte_block)
    return sha1_hash.hexdigest()


def files_are_identical(first: Path, second: Path) -> bool:
    """Return whether two files have the same size and SHA-1 hash."""

    if first.stat().st_size != second.stat().st_size:
        return False
    return calculate_file_hash(first) == calculate_file_hash(second)


def find_backup_path(path: Path) -> Path:
    """Return the first unused ``<name>.bak``, ``<name>.bak2`` ... sibling."""

    candidate = path.with_name(path.name + ".bak")
    counter = 2
    while candidate.exists():
        candidate = path.with_name(f"{path.name}.bak{counter}")
        counter += 1
    return candidate


def backup_existing_file(path: Path) -> Path | None:
    """Rename ``path`` to a free backup name; return the backup or ``None``."""

    if not path.exists():
        return None
    backup = find_backup_path(path)
    _ = path.rename(backup)
    return backup


__all__ = [
    "backup_existing_file",
    "calculate_file_hash",
    "ensure_directory",
    "ensure_parent_directory",
    "files_are_identical",
    "find_backup_path",
    "write_text_file",
]
