"""Scanner for per-application user caches in ~/Library/Caches.

Files are grouped by their top-level directory under Caches, and each
group becomes one cleanup item representing that application's cache.
"""

import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from opencleaner.core.paths import get_caches_dir
from opencleaner.models.item import CleanupCategory, CleanupItem, LocalizedReason, RiskLevel
from opencleaner.scanners.base import Clock, Scanner, utc_now
from opencleaner.utils.fs import days_since, format_date, format_size, is_hidden

logger = logging.getLogger(__name__)

# Caches that are regenerated constantly and always safe to drop
SAFE_CACHE_PATTERNS: tuple[str, ...] = (
    "com.apple.",
    "CloudKit",
    "Metadata",
    "Safari",
)

# Caches not accessed for longer than this are considered stale
STALE_CACHE_DAYS = 30


@dataclass(slots=True)
class _CacheGroup:
    size: int = 0
    last_accessed: datetime | None = None


def classify_cache(app_name: str, last_accessed: datetime | None, now: datetime) -> RiskLevel:
    """Determine the risk level of one application's cache.

    Args:
        app_name: Top-level directory name under Caches.
        last_accessed: Most recent access time of any file in the group.
        now: Current time.

    Returns:
        SAFE for known system/cloud/Safari caches or caches idle for more
        than 30 days, CAUTION otherwise.
    """
    if any(pattern in app_name for pattern in SAFE_CACHE_PATTERNS):
        return RiskLevel.SAFE

    if last_accessed is not None and days_since(last_accessed, now) > STALE_CACHE_DAYS:
        return RiskLevel.SAFE

    return RiskLevel.CAUTION


def cache_reason(
    app_name: str, last_accessed: datetime | None, size: int, now: datetime
) -> LocalizedReason:
    """Build the bilingual justification for a cache item."""
    size_str = format_size(size)

    if last_accessed is None:
        return LocalizedReason(
            en=(
                f"Cache for '{app_name}' ({size_str}). Can be safely deleted; "
                "the app will recreate it as needed."
            ),
            ja=f"'{app_name}' のキャッシュ（{size_str}）。削除しても、アプリが必要に応じて再作成します。",
        )

    days = days_since(last_accessed, now)
    date_str = format_date(last_accessed)

    if days > STALE_CACHE_DAYS:
        return LocalizedReason(
            en=(
                f"Cache for '{app_name}' ({size_str}) hasn't been accessed in {days} days "
                f"(since {date_str}). Safe to delete."
            ),
            ja=(
                f"'{app_name}' のキャッシュ（{size_str}）は {days} 日間アクセスされていません"
                f"（最終: {date_str}）。削除しても安全です。"
            ),
        )

    return LocalizedReason(
        en=(
            f"Cache for '{app_name}' ({size_str}) was last accessed on {date_str}. "
            "The app may need to rebuild cache after deletion."
        ),
        ja=(
            f"'{app_name}' のキャッシュ（{size_str}）は {date_str} に最後にアクセスされました。"
            "削除後、アプリがキャッシュを再構築する可能性があります。"
        ),
    )


class CacheScanner(Scanner):
    """Scans ~/Library/Caches and reports one item per application cache.

    Args:
        root: Caches directory to scan. Defaults to ~/Library/Caches.
        clock: Source of the current time, used for age classification.
    """

    def __init__(self, root: Path | None = None, clock: Clock = utc_now) -> None:
        self._root = root if root is not None else get_caches_dir()
        self._clock = clock

    @property
    def category(self) -> CleanupCategory:
        """Return USER_CACHE as the cleanup category."""
        return CleanupCategory.USER_CACHE

    def scan(self) -> list[CleanupItem]:
        """Group cache files by application and classify each group.

        Hidden files and directories are ignored. Groups whose files add
        up to zero bytes are not reported.
        """
        if not self._root.is_dir():
            return []

        now = self._clock()
        groups = self._collect_groups()

        items: list[CleanupItem] = []
        for app_name in sorted(groups):
            group = groups[app_name]
            if group.size <= 0:
                continue
            items.append(
                CleanupItem(
                    path=self._root / app_name,
                    size=group.size,
                    category=self.category,
                    risk_level=classify_cache(app_name, group.last_accessed, now),
                    reason=cache_reason(app_name, group.last_accessed, group.size, now),
                    last_accessed=group.last_accessed,
                    parent_app=app_name,
                )
            )

        logger.info("Found %d cache groups in %s", len(items), self._root)
        return items

    def _collect_groups(self) -> dict[str, _CacheGroup]:
        groups: dict[str, _CacheGroup] = {}

        def _on_error(exc: OSError) -> None:
            logger.debug("Skipping unreadable cache directory %s: %s", exc.filename, exc)

        for dirpath, dirnames, filenames in os.walk(self._root, onerror=_on_error):
            dirnames[:] = [d for d in dirnames if not is_hidden(d)]
            relative = Path(dirpath).relative_to(self._root)

            for filename in filenames:
                if is_hidden(filename):
                    continue
                try:
                    st = os.lstat(os.path.join(dirpath, filename))
                except OSError:
                    continue

                # Files directly under Caches form their own group
                app_name = relative.parts[0] if relative.parts else filename
                group = groups.setdefault(app_name, _CacheGroup())
                group.size += st.st_size

                accessed = datetime.fromtimestamp(st.st_atime, tz=UTC)
                if group.last_accessed is None or accessed > group.last_accessed:
                    group.last_accessed = accessed

        return groups
