"""Scanner for data left behind by uninstalled applications."""

import logging
from collections.abc import Callable
from pathlib import Path

from opencleaner.core.paths import get_application_support_dir, get_containers_dir
from opencleaner.models.item import CleanupCategory, CleanupItem, LocalizedReason, RiskLevel
from opencleaner.scanners.base import Scanner
from opencleaner.scanners.installed_apps import InstalledApps
from opencleaner.scanners.preferences import extract_bundle_identifier
from opencleaner.utils.fs import directory_size, is_hidden

logger = logging.getLogger(__name__)

# Leftover folders at or below this size are not worth reporting
MIN_APP_DATA_SIZE = 1_000_000


def app_data_reason(bundle_id: str, location: str) -> LocalizedReason:
    """Build the bilingual justification for orphaned app data."""
    return LocalizedReason(
        en=(
            f"Data for '{bundle_id}' in {location} - app no longer installed. "
            "Contains application settings and data that can be removed."
        ),
        ja=(
            f"'{bundle_id}' の {location} データ - アプリは既にインストールされていません。"
            "アプリケーションの設定とデータが含まれています。"
        ),
    )


class AppDataScanner(Scanner):
    """Scans ~/Library/Containers for folders of uninstalled applications.

    Container folders are named by bundle identifier, which makes the
    comparison against installed apps reliable. Application Support
    folder names do not match app names reliably, so that location is
    only scanned when explicitly enabled, and only folders named like a
    reverse-DNS identifier (com., org., net.) are considered there.

    Args:
        containers_dir: Containers directory. Defaults to ~/Library/Containers.
        application_support_dir: Application Support directory. Defaults to
            ~/Library/Application Support.
        installed_apps: Callable returning the installed identifier set.
        include_application_support: Also scan Application Support.
    """

    def __init__(
        self,
        containers_dir: Path | None = None,
        application_support_dir: Path | None = None,
        installed_apps: Callable[[], set[str]] | None = None,
        include_application_support: bool = False,
    ) -> None:
        self._containers_dir = (
            containers_dir if containers_dir is not None else get_containers_dir()
        )
        self._application_support_dir = (
            application_support_dir
            if application_support_dir is not None
            else get_application_support_dir()
        )
        self._installed_apps = installed_apps or InstalledApps().bundle_identifiers
        self._include_application_support = include_application_support

    @property
    def category(self) -> CleanupCategory:
        """Return ORPHANED_APP_DATA as the cleanup category."""
        return CleanupCategory.ORPHANED_APP_DATA

    def scan(self) -> list[CleanupItem]:
        """Report orphaned data folders larger than 1 MB. Every item is CAUTION."""
        installed = self._installed_apps()

        items = self._scan_location(self._containers_dir, "Containers", installed)
        if self._include_application_support:
            items.extend(
                self._scan_location(
                    self._application_support_dir,
                    "Application Support",
                    installed,
                    identify=extract_bundle_identifier,
                )
            )

        logger.info("Found %d orphaned app data folders", len(items))
        return items

    def _scan_location(
        self,
        directory: Path,
        location: str,
        installed: set[str],
        identify: Callable[[str], str | None] | None = None,
    ) -> list[CleanupItem]:
        """Report orphaned folders directly below ``directory``.

        Without ``identify`` the folder name itself is the bundle
        identifier. Otherwise folders for which ``identify`` returns None
        are skipped, and the derived identifier is looked up instead.
        """
        if not directory.is_dir():
            return []

        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            return []

        items: list[CleanupItem] = []
        for entry in entries:
            name = entry.name
            if is_hidden(name) or name.startswith("com.apple."):
                continue
            if not entry.is_dir() or entry.is_symlink():
                continue

            bundle_id = identify(name) if identify is not None else name
            if bundle_id is None or bundle_id in installed:
                continue

            size = directory_size(entry, skip_hidden=True)
            if size <= MIN_APP_DATA_SIZE:
                continue

            items.append(
                CleanupItem(
                    path=entry,
                    size=size,
                    category=self.category,
                    risk_level=RiskLevel.CAUTION,
                    reason=app_data_reason(bundle_id, location),
                    parent_app=bundle_id,
                )
            )

        return items
