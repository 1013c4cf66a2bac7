"""Safety manager gating every destructive operation.

Items are processed one at a time. A failure on one item is recorded in
its CleanupResult and never stops the rest of the batch.
"""

import logging
import shutil
import subprocess
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from opencleaner.core.paths import get_trash_dir
from opencleaner.models.cleanup_result import CleanupResult
from opencleaner.models.item import CleanupCategory, CleanupItem
from opencleaner.utils.shell import run_command

logger = logging.getLogger(__name__)

# Security software and credential stores that must never be touched
DEFAULT_WHITELIST: frozenset[str] = frozenset(
    {
        "com.malwarebytes",
        "com.crowdstrike",
        "com.symantec",
        "com.kaspersky",
        "com.f-secure",
        "com.avast",
        "com.avg",
        "com.eset",
        "Keychains",
        "Security",
    }
)

WHITELIST_ERROR = "Item is protected by whitelist"
NOT_IN_TRASH_ERROR = "Only items in the Trash can be deleted permanently"

SNAPSHOT_COMMAND = ["tmutil", "localsnapshot"]


class SafetyError(Exception):
    """Base exception for safety manager errors."""


class SnapshotError(SafetyError):
    """Raised when creating a local snapshot fails.

    Attributes:
        output: Combined output of the snapshot command.
    """

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


def unique_trash_path(trash_dir: Path, name: str, now: datetime | None = None) -> Path:
    """Choose a destination inside the trash that does not exist yet.

    Collisions get a time suffix (``report 14.03.22.pdf``) and, if that is
    also taken, a counter.

    Args:
        trash_dir: Trash directory.
        name: Original file name.
        now: Time used for the suffix. Defaults to the current local time.

    Returns:
        Non-existing path inside ``trash_dir``.
    """
    candidate = trash_dir / name
    if not candidate.exists() and not candidate.is_symlink():
        return candidate

    original = Path(name)
    stem, suffix = original.stem, original.suffix
    stamp = (now or datetime.now()).strftime("%H.%M.%S")

    candidate = trash_dir / f"{stem} {stamp}{suffix}"
    counter = 2
    while candidate.exists() or candidate.is_symlink():
        candidate = trash_dir / f"{stem} {stamp} {counter}{suffix}"
        counter += 1
    return candidate


class SafetyManager:
    """Owns the deletion whitelist and performs gated deletions.

    A path is protected when it contains any whitelist entry as a plain
    substring, anywhere in the path.

    Args:
        trash_dir: Trash directory items are moved into. Defaults to ~/.Trash.
        extra_whitelist: Entries added on top of the defaults.
    """

    def __init__(
        self,
        trash_dir: Path | None = None,
        extra_whitelist: Iterable[str] = (),
    ) -> None:
        self._trash_dir = trash_dir if trash_dir is not None else get_trash_dir()
        self._whitelist: set[str] = set(DEFAULT_WHITELIST)
        self._whitelist.update(entry for entry in extra_whitelist if entry)

    @property
    def whitelist(self) -> frozenset[str]:
        """Current whitelist entries."""
        return frozenset(self._whitelist)

    def add_to_whitelist(self, entry: str) -> None:
        """Protect every path containing ``entry``."""
        if not entry:
            msg = "Whitelist entry cannot be empty"
            raise ValueError(msg)
        self._whitelist.add(entry)

    def remove_from_whitelist(self, entry: str) -> None:
        """Stop protecting paths containing ``entry``. Unknown entries are ignored."""
        self._whitelist.discard(entry)

    def is_whitelisted(self, item: CleanupItem) -> bool:
        """Check whether an item's path contains any whitelist entry."""
        path = str(item.path)
        return any(entry in path for entry in self._whitelist)

    def move_to_trash(self, items: Iterable[CleanupItem]) -> list[CleanupResult]:
        """Move items into the trash, one result per item.

        Args:
            items: Items to move.

        Returns:
            CleanupResult per item, in input order. Successful results
            carry the location inside the trash.
        """
        results: list[CleanupResult] = []
        for item in items:
            if self.is_whitelisted(item):
                logger.warning("Refusing to trash protected item: %s", item.path)
                results.append(CleanupResult(item=item, success=False, error=WHITELIST_ERROR))
                continue

            try:
                self._trash_dir.mkdir(parents=True, exist_ok=True)
                destination = unique_trash_path(self._trash_dir, item.path.name)
                shutil.move(str(item.path), str(destination))
            except OSError as e:
                logger.warning("Failed to move %s to trash: %s", item.path, e)
                results.append(CleanupResult(item=item, success=False, error=str(e)))
                continue

            logger.debug("Moved %s to %s", item.path, destination)
            results.append(CleanupResult(item=item, success=True, trashed_path=destination))

        return results

    def delete_permanently(self, items: Iterable[CleanupItem]) -> list[CleanupResult]:
        """Irreversibly delete items that are already in the trash.

        Items of any other category are refused with a failure result.

        Args:
            items: Trash items to delete.

        Returns:
            CleanupResult per item, in input order.
        """
        results: list[CleanupResult] = []
        for item in items:
            if item.category != CleanupCategory.TRASH:
                logger.warning("Refusing to permanently delete non-trash item: %s", item.path)
                results.append(CleanupResult(item=item, success=False, error=NOT_IN_TRASH_ERROR))
                continue

            if self.is_whitelisted(item):
                logger.warning("Refusing to delete protected item: %s", item.path)
                results.append(CleanupResult(item=item, success=False, error=WHITELIST_ERROR))
                continue

            try:
                if item.path.is_dir() and not item.path.is_symlink():
                    shutil.rmtree(item.path)
                else:
                    item.path.unlink()
            except OSError as e:
                logger.warning("Failed to delete %s: %s", item.path, e)
                results.append(CleanupResult(item=item, success=False, error=str(e)))
                continue

            logger.debug("Deleted %s", item.path)
            results.append(CleanupResult(item=item, success=True))

        return results

    def cleanup(self, items: Iterable[CleanupItem]) -> list[CleanupResult]:
        """Clean a selection: trash items are deleted, everything else is trashed.

        Returns:
            Results of the moves followed by results of the deletions.
        """
        selection = list(items)
        to_delete = [item for item in selection if item.category == CleanupCategory.TRASH]
        to_move = [item for item in selection if item.category != CleanupCategory.TRASH]

        results = self.move_to_trash(to_move)
        results.extend(self.delete_permanently(to_delete))

        failed = sum(1 for result in results if result.failed)
        logger.info("Cleanup finished: %d succeeded, %d failed", len(results) - failed, failed)
        return results

    def create_snapshot(self) -> str:
        """Create a local Time Machine snapshot.

        Returns:
            Combined output of the snapshot command.

        Raises:
            SnapshotError: If the command is missing, times out, or exits
                with a non-zero status.
        """
        try:
            result = run_command(SNAPSHOT_COMMAND, merge_stderr=True)
        except FileNotFoundError as e:
            raise SnapshotError(f"Snapshot command not found: {SNAPSHOT_COMMAND[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise SnapshotError("Snapshot command timed out") from e

        if not result.success:
            logger.warning("Snapshot failed with exit code %d", result.returncode)
            raise SnapshotError(
                f"Snapshot failed (exit code {result.returncode}): {result.output.strip()}",
                output=result.output,
            )

        logger.info("Created local snapshot")
        return result.output
