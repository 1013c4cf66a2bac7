"""Filesystem helpers shared by the scanners.

Provides recursive size calculation, timestamp extraction and age
arithmetic. All helpers are best-effort: unreadable entries contribute
nothing instead of raising.
"""

import logging
import os
import stat
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def is_hidden(name: str) -> bool:
    """Check if a file or directory name is hidden (dot-prefixed)."""
    return name.startswith(".")


def directory_size(path: Path, *, skip_hidden: bool = False) -> int:
    """Sum the sizes of all regular files below a directory.

    Symbolic links are neither followed nor counted. Subdirectories that
    cannot be listed are skipped.

    Args:
        path: Directory to measure.
        skip_hidden: If True, ignore dot-prefixed files and do not descend
            into dot-prefixed directories.

    Returns:
        Total size in bytes (0 if nothing could be read).
    """
    total = 0

    def _on_error(exc: OSError) -> None:
        logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)

    for root, dirnames, filenames in os.walk(path, onerror=_on_error):
        if skip_hidden:
            dirnames[:] = [d for d in dirnames if not is_hidden(d)]
        for filename in filenames:
            if skip_hidden and is_hidden(filename):
                continue
            try:
                st = os.lstat(os.path.join(root, filename))
            except OSError:
                continue
            if stat.S_ISREG(st.st_mode):
                total += st.st_size

    return total


def entry_size(path: Path) -> int:
    """Return the size of a file, or the recursive size of a directory."""
    try:
        if path.is_dir() and not path.is_symlink():
            return directory_size(path)
        return path.lstat().st_size
    except OSError:
        return 0


def modified_at(path: Path) -> datetime | None:
    """Return the last modification time of a path, or None on error."""
    try:
        return datetime.fromtimestamp(path.lstat().st_mtime, tz=UTC)
    except OSError:
        return None


def days_since(moment: datetime, now: datetime) -> int:
    """Number of whole days elapsed between ``moment`` and ``now``.

    Partial days are discarded, so something that happened exactly seven
    days ago yields 7 and something a few seconds short of that yields 6.
    """
    return int((now - moment).total_seconds() // SECONDS_PER_DAY)


def format_date(moment: datetime) -> str:
    """Format a timestamp as a medium-length date (e.g. ``Jan 15, 2024``)."""
    return moment.astimezone().strftime("%b %d, %Y")
