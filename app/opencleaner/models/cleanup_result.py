"""Cleanup result model."""

from dataclasses import dataclass
from pathlib import Path

from opencleaner.models.item import CleanupItem


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Outcome of one deletion attempt.

    Attributes:
        item: The item that was operated on.
        success: Whether the operation completed successfully.
        trashed_path: Resulting location inside the trash, if moved there.
        error: Error message if the operation failed, None otherwise.
    """

    item: CleanupItem
    success: bool
    trashed_path: Path | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return not self.success
