"""Scanner for items sitting in the user's Trash."""

import logging
from pathlib import Path

from opencleaner.core.paths import get_trash_dir
from opencleaner.models.item import CleanupCategory, CleanupItem, LocalizedReason, RiskLevel
from opencleaner.scanners.base import Scanner
from opencleaner.utils.fs import entry_size, modified_at

logger = logging.getLogger(__name__)

IGNORED_NAMES: frozenset[str] = frozenset({".DS_Store"})

TRASH_REASON = LocalizedReason(en="Item in Trash", ja="ゴミ箱にある項目")

PERMISSION_REASON = LocalizedReason(
    en=(
        "Unable to read the Trash. Full Disk Access is required: grant it in "
        "System Settings > Privacy & Security > Full Disk Access."
    ),
    ja=(
        "ゴミ箱を読み取れません。フルディスクアクセスが必要です: "
        "システム設定 > プライバシーとセキュリティ > フルディスクアクセス で許可してください。"
    ),
)


class TrashScanner(Scanner):
    """Lists top-level entries of ~/.Trash.

    Unlike the other scanners, a Trash that cannot be listed is reported
    as a single RISKY placeholder item describing the missing permission.

    Args:
        trash_dir: Trash directory. Defaults to ~/.Trash.
    """

    def __init__(self, trash_dir: Path | None = None) -> None:
        self._trash_dir = trash_dir if trash_dir is not None else get_trash_dir()

    @property
    def category(self) -> CleanupCategory:
        """Return TRASH as the cleanup category."""
        return CleanupCategory.TRASH

    def scan(self) -> list[CleanupItem]:
        try:
            entries = sorted(self._trash_dir.iterdir())
        except FileNotFoundError:
            logger.debug("Trash directory does not exist: %s", self._trash_dir)
            return []
        except OSError as e:
            logger.warning("Cannot read Trash %s: %s", self._trash_dir, e)
            return [self._permission_placeholder()]

        items: list[CleanupItem] = []
        for entry in entries:
            if entry.name in IGNORED_NAMES:
                continue
            items.append(
                CleanupItem(
                    path=entry,
                    size=entry_size(entry),
                    category=self.category,
                    risk_level=RiskLevel.CAUTION,
                    reason=TRASH_REASON,
                    last_modified=modified_at(entry),
                )
            )

        logger.info("Found %d items in Trash", len(items))
        return items

    def _permission_placeholder(self) -> CleanupItem:
        return CleanupItem(
            path=self._trash_dir,
            size=0,
            category=self.category,
            risk_level=RiskLevel.RISKY,
            reason=PERMISSION_REASON,
        )
