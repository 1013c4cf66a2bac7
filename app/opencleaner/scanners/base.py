"""Abstract base class for cleanup scanners.

This module defines the Scanner interface that all scanning strategies
must implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime

from opencleaner.models.item import CleanupCategory, CleanupItem

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock used by scanners for age classification."""
    return datetime.now(UTC)


class Scanner(ABC):
    """Abstract base class for all cleanup scanners.

    A scanner is registered under one primary category. Scanners
    only read the filesystem; they never modify it. Directories that
    cannot be listed are skipped rather than reported as errors, so
    ``scan()`` only raises on a failure that makes the whole category
    unscannable.

    Example:
        >>> scanner = CacheScanner()
        >>> for item in scanner.scan():
        ...     print(f"{item.path}: {item.size_human}")
    """

    @property
    @abstractmethod
    def category(self) -> CleanupCategory:
        """Return the category this scanner produces.

        Returns:
            CleanupCategory enum value.
        """

    @property
    def categories(self) -> tuple[CleanupCategory, ...]:
        """Return every category this scanner may emit items for."""
        return (self.category,)

    @abstractmethod
    def scan(self) -> list[CleanupItem]:
        """Scan and return all candidate items for this category.

        Returns:
            List of CleanupItem instances.

        Raises:
            OSError: If enumeration fails catastrophically.
        """
