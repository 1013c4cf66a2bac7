"""Scanner for orphaned preference files in ~/Library/Preferences.

Only the top level of the Preferences directory is inspected. A plist is
reported when the bundle identifier derived from its name does not belong
to any installed application. Files whose names do not look like a
reverse-DNS identifier are never reported.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from opencleaner.core.paths import get_preferences_dir
from opencleaner.models.item import CleanupCategory, CleanupItem, LocalizedReason, RiskLevel
from opencleaner.scanners.base import Scanner
from opencleaner.scanners.installed_apps import InstalledApps
from opencleaner.utils.fs import format_date, is_hidden, modified_at

logger = logging.getLogger(__name__)

IDENTIFIER_PREFIXES: tuple[str, ...] = ("com.", "org.", "net.")


def extract_bundle_identifier(file_name: str) -> str | None:
    """Derive a bundle identifier from a preference file name.

    Args:
        file_name: Plist file name without the ``.plist`` extension.

    Returns:
        The first three dot-separated components for reverse-DNS names
        (the whole name if it has fewer), or None for anything else.
    """
    if not file_name.startswith(IDENTIFIER_PREFIXES):
        return None

    components = file_name.split(".")
    if len(components) >= 3:
        return ".".join(components[:3])
    return file_name


def preference_reason(bundle_id: str, last_modified: datetime | None) -> LocalizedReason:
    """Build the bilingual justification for an orphaned preference file."""
    if last_modified is not None:
        date_str = format_date(last_modified)
        return LocalizedReason(
            en=(
                f"Preference file for '{bundle_id}' - app no longer exists. "
                f"Last modified: {date_str}. May contain old settings."
            ),
            ja=(
                f"'{bundle_id}' の設定ファイル - アプリは既に存在しません。"
                f"最終更新: {date_str}。古い設定が含まれている可能性があります。"
            ),
        )

    return LocalizedReason(
        en=(
            f"Preference file for '{bundle_id}' - app no longer exists. "
            "Can be deleted to clean up old settings."
        ),
        ja=(
            f"'{bundle_id}' の設定ファイル - アプリは既に存在しません。"
            "古い設定を整理するために削除できます。"
        ),
    )


class OrphanedPrefsScanner(Scanner):
    """Scans ~/Library/Preferences for plists of uninstalled applications.

    Args:
        root: Preferences directory to scan. Defaults to ~/Library/Preferences.
        installed_apps: Callable returning the installed identifier set.
            Defaults to InstalledApps().bundle_identifiers.
    """

    def __init__(
        self,
        root: Path | None = None,
        installed_apps: Callable[[], set[str]] | None = None,
    ) -> None:
        self._root = root if root is not None else get_preferences_dir()
        self._installed_apps = installed_apps or InstalledApps().bundle_identifiers

    @property
    def category(self) -> CleanupCategory:
        """Return BROKEN_PREFS as the cleanup category."""
        return CleanupCategory.BROKEN_PREFS

    def scan(self) -> list[CleanupItem]:
        """Report orphaned ``.plist`` files. Every item is CAUTION."""
        if not self._root.is_dir():
            return []

        try:
            entries = sorted(self._root.iterdir())
        except OSError as e:
            logger.warning("Cannot list preferences directory %s: %s", self._root, e)
            return []

        installed = self._installed_apps()
        items: list[CleanupItem] = []

        for entry in entries:
            if is_hidden(entry.name) or entry.suffix.lower() != ".plist":
                continue
            if not entry.is_file():
                continue

            file_name = entry.stem
            if file_name.startswith("com.apple.") or ".ByHost." in file_name:
                continue

            bundle_id = extract_bundle_identifier(file_name)
            if bundle_id is None or bundle_id in installed:
                continue

            try:
                size = entry.lstat().st_size
            except OSError:
                size = 0
            last_modified = modified_at(entry)

            items.append(
                CleanupItem(
                    path=entry,
                    size=size,
                    category=self.category,
                    risk_level=RiskLevel.CAUTION,
                    reason=preference_reason(bundle_id, last_modified),
                    last_modified=last_modified,
                    parent_app=bundle_id,
                )
            )

        logger.info("Found %d orphaned preference files", len(items))
        return items
