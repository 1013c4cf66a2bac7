"""Scanner for large files and applications in the home directory."""

import logging
import os
import stat
from datetime import UTC, datetime
from pathlib import Path

from opencleaner.core.paths import SYSTEM_APPLICATIONS_DIR
from opencleaner.models.item import CleanupCategory, CleanupItem, LocalizedReason, RiskLevel
from opencleaner.scanners.base import Scanner
from opencleaner.utils.fs import directory_size, is_hidden, modified_at

logger = logging.getLogger(__name__)

# Files must be strictly larger than this to be reported
LARGE_FILE_THRESHOLD = 100 * 1024 * 1024

# Top-level home directories that are never entered
EXCLUDED_HOME_DIRS: frozenset[str] = frozenset({"Library", "Public", "Desktop"})

# Directory bundles treated as a single opaque item
PACKAGE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".app",
        ".bundle",
        ".framework",
        ".plugin",
        ".kext",
        ".pkg",
        ".mpkg",
        ".photoslibrary",
        ".musiclibrary",
        ".tvlibrary",
        ".fcpbundle",
        ".logicx",
        ".band",
        ".xcarchive",
        ".rtfd",
    }
)

LARGE_FILE_REASON = LocalizedReason(
    en="Large File. Ensure it is not needed.",
    ja="大容量ファイル。不要か確認してください。",
)

LARGE_APP_REASON = LocalizedReason(
    en="Large Application. Ensure it is not needed.",
    ja="大容量アプリケーション。不要か確認してください。",
)


def is_package(name: str) -> bool:
    """Check if a directory name denotes a bundle package."""
    return os.path.splitext(name)[1].lower() in PACKAGE_EXTENSIONS


class LargeFileScanner(Scanner):
    """Finds files and bundle packages larger than 100 MB.

    The home directory is walked with hidden entries skipped and the
    top-level Library, Public and Desktop folders excluded. Packages are
    never descended into; their recursive size is compared against the
    threshold instead. ``.app`` bundles are reported under APPLICATIONS,
    everything else under LARGE_FILES.

    Args:
        home: Home directory to walk. Defaults to the current user's home.
        app_dirs: Additional roots to walk. Defaults to /Applications.
    """

    def __init__(
        self, home: Path | None = None, app_dirs: tuple[Path, ...] | None = None
    ) -> None:
        self._home = home if home is not None else Path.home()
        self._app_dirs = app_dirs if app_dirs is not None else (SYSTEM_APPLICATIONS_DIR,)

    @property
    def category(self) -> CleanupCategory:
        """Return LARGE_FILES as the cleanup category."""
        return CleanupCategory.LARGE_FILES

    @property
    def categories(self) -> tuple[CleanupCategory, ...]:
        """Return LARGE_FILES and APPLICATIONS."""
        return (CleanupCategory.LARGE_FILES, CleanupCategory.APPLICATIONS)

    def scan(self) -> list[CleanupItem]:
        items: list[CleanupItem] = []
        for root in (self._home, *self._app_dirs):
            if root.is_dir():
                items.extend(self._walk(root, is_home=root == self._home))

        logger.info("Found %d large files", len(items))
        return items

    def _walk(self, root: Path, *, is_home: bool) -> list[CleanupItem]:
        items: list[CleanupItem] = []

        def _on_error(exc: OSError) -> None:
            logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            current = Path(dirpath)
            at_top = is_home and current == root

            descend: list[str] = []
            for name in sorted(dirnames):
                if is_hidden(name):
                    continue
                if at_top and name in EXCLUDED_HOME_DIRS:
                    continue
                path = current / name
                if is_package(name):
                    if not path.is_symlink():
                        self._add_if_large(items, path, directory_size(path))
                    continue
                descend.append(name)
            dirnames[:] = descend

            for name in sorted(filenames):
                if is_hidden(name):
                    continue
                path = current / name
                try:
                    st = path.lstat()
                except OSError:
                    continue
                if stat.S_ISREG(st.st_mode):
                    self._add_if_large(items, path, st.st_size)

        return items

    def _add_if_large(self, items: list[CleanupItem], path: Path, size: int) -> None:
        if size <= LARGE_FILE_THRESHOLD:
            return

        is_app = path.suffix.lower() == ".app"
        items.append(
            CleanupItem(
                path=path,
                size=size,
                category=CleanupCategory.APPLICATIONS if is_app else CleanupCategory.LARGE_FILES,
                risk_level=RiskLevel.CAUTION,
                reason=LARGE_APP_REASON if is_app else LARGE_FILE_REASON,
                last_modified=modified_at(path),
            )
        )
