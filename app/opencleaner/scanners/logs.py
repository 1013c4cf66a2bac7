"""Scanner for log files and crash reports in ~/Library/Logs."""

import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from opencleaner.core.paths import get_logs_dir
from opencleaner.models.item import CleanupCategory, CleanupItem, LocalizedReason, RiskLevel
from opencleaner.scanners.base import Clock, Scanner, utc_now
from opencleaner.utils.fs import days_since, format_date, format_size, is_hidden

logger = logging.getLogger(__name__)

LOG_EXTENSIONS: frozenset[str] = frozenset({"log", "txt", "crash", "diag"})

# Diagnostic reports are informational only
DIAGNOSTIC_EXTENSIONS: frozenset[str] = frozenset({"crash", "diag"})

# Files at or below this size are not worth reporting
MIN_LOG_SIZE = 1024

# Logs older than this are considered stale
STALE_LOG_DAYS = 7


def _extension(path: Path) -> str:
    return path.suffix.lower().lstrip(".")


def classify_log(path: Path, last_modified: datetime | None, now: datetime) -> RiskLevel:
    """Determine the risk level of a log file.

    Args:
        path: Log file path.
        last_modified: Last modification time, if known.
        now: Current time.

    Returns:
        SAFE for crash/diagnostic reports and logs older than 7 days,
        CAUTION otherwise.
    """
    if _extension(path) in DIAGNOSTIC_EXTENSIONS:
        return RiskLevel.SAFE

    if last_modified is not None and days_since(last_modified, now) > STALE_LOG_DAYS:
        return RiskLevel.SAFE

    return RiskLevel.CAUTION


def log_reason(
    path: Path, last_modified: datetime | None, size: int, now: datetime
) -> LocalizedReason:
    """Build the bilingual justification for a log item."""
    file_name = path.name
    size_str = format_size(size)

    if _extension(path) == "crash":
        return LocalizedReason(
            en=f"Crash report '{file_name}' ({size_str}). Old crash reports can be safely deleted.",
            ja=f"クラッシュレポート '{file_name}'（{size_str}）。古いクラッシュレポートは削除しても安全です。",
        )

    if last_modified is None:
        return LocalizedReason(
            en=f"Log file '{file_name}' ({size_str}). Log files can be deleted to free up space.",
            ja=f"ログファイル '{file_name}'（{size_str}）。ログファイルは削除して容量を解放できます。",
        )

    days = days_since(last_modified, now)
    if days > STALE_LOG_DAYS:
        return LocalizedReason(
            en=(
                f"Log file '{file_name}' ({size_str}) was last modified {days} days ago. "
                "Old logs are safe to delete."
            ),
            ja=(
                f"ログファイル '{file_name}'（{size_str}）は {days} 日前に最終更新されました。"
                "古いログは削除しても安全です。"
            ),
        )

    date_str = format_date(last_modified)
    return LocalizedReason(
        en=(
            f"Log file '{file_name}' ({size_str}) was modified recently ({date_str}). "
            "May contain useful debugging information."
        ),
        ja=(
            f"ログファイル '{file_name}'（{size_str}）は最近更新されました（{date_str}）。"
            "デバッグに有用な情報が含まれている可能性があります。"
        ),
    )


def extract_app_name(path: Path, root: Path) -> str | None:
    """Best-effort attribution of a log file to an application.

    Looks for a bundle-identifier-style path component below the logs
    root (``com.vendor.App`` -> ``App``), then falls back to the parent
    directory name.

    Args:
        path: Log file path.
        root: The logs root directory.

    Returns:
        Application name, or None for files directly under the root.
    """
    try:
        components = path.relative_to(root).parts[:-1]
    except ValueError:
        components = path.parts[:-1]

    for component in components:
        if component.startswith(("com.", "org.")):
            parts = component.split(".")
            if len(parts) >= 3:
                return ".".join(parts[2:])

    parent = path.parent.name
    if path.parent != root and parent not in ("Logs", "Library"):
        return parent

    return None


class LogScanner(Scanner):
    """Scans ~/Library/Logs recursively for log files and crash reports.

    Args:
        root: Logs directory to scan. Defaults to ~/Library/Logs.
        clock: Source of the current time, used for age classification.
    """

    def __init__(self, root: Path | None = None, clock: Clock = utc_now) -> None:
        self._root = root if root is not None else get_logs_dir()
        self._clock = clock

    @property
    def category(self) -> CleanupCategory:
        """Return LOGS as the cleanup category."""
        return CleanupCategory.LOGS

    def scan(self) -> list[CleanupItem]:
        """Report every log file larger than 1 KB, one item per file."""
        if not self._root.is_dir():
            return []

        now = self._clock()
        items: list[CleanupItem] = []

        def _on_error(exc: OSError) -> None:
            logger.debug("Skipping unreadable log directory %s: %s", exc.filename, exc)

        for dirpath, dirnames, filenames in os.walk(self._root, onerror=_on_error):
            dirnames[:] = sorted(d for d in dirnames if not is_hidden(d))

            for filename in sorted(filenames):
                if is_hidden(filename):
                    continue

                path = Path(dirpath) / filename
                if _extension(path) not in LOG_EXTENSIONS:
                    continue

                try:
                    st = path.lstat()
                except OSError:
                    continue

                if st.st_size <= MIN_LOG_SIZE:
                    continue

                last_modified = datetime.fromtimestamp(st.st_mtime, tz=UTC)
                items.append(
                    CleanupItem(
                        path=path,
                        size=st.st_size,
                        category=self.category,
                        risk_level=classify_log(path, last_modified, now),
                        reason=log_reason(path, last_modified, st.st_size, now),
                        last_modified=last_modified,
                        parent_app=extract_app_name(path, self._root),
                    )
                )

        logger.info("Found %d log files in %s", len(items), self._root)
        return items
