"""Scan result model.

A ScanResult is an immutable snapshot of one completed scan. After a
cleanup, callers build a superseding result with ``without()`` rather
than mutating the existing one.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from opencleaner.models.item import CleanupCategory, CleanupItem, RiskLevel
from opencleaner.utils.fs import format_size


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Aggregated outcome of one scan run.

    Attributes:
        items: Discovered items, ordered by descending size.
        scan_duration: Wall-clock duration of the scan in seconds.
        scanned_categories: Categories of the scanners that actually ran.
        scan_date: When the scan was performed.
        id: Unique identifier of this result.
    """

    items: list[CleanupItem]
    scan_duration: float
    scanned_categories: list[CleanupCategory]
    scan_date: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: UUID = field(default_factory=uuid4)

    @property
    def total_size(self) -> int:
        """Sum of all item sizes."""
        return sum(item.size for item in self.items)

    @property
    def total_size_human(self) -> str:
        """Return human-readable total size."""
        return format_size(self.total_size)

    @property
    def items_by_category(self) -> dict[CleanupCategory, list[CleanupItem]]:
        """Items grouped by category, in item order."""
        grouped: dict[CleanupCategory, list[CleanupItem]] = {}
        for item in self.items:
            grouped.setdefault(item.category, []).append(item)
        return grouped

    @property
    def items_by_risk_level(self) -> dict[RiskLevel, list[CleanupItem]]:
        """Items grouped by risk level, in item order."""
        grouped: dict[RiskLevel, list[CleanupItem]] = {}
        for item in self.items:
            grouped.setdefault(item.risk_level, []).append(item)
        return grouped

    @property
    def risk_level_counts(self) -> dict[RiskLevel, int]:
        """Number of items per risk level."""
        return {level: len(items) for level, items in self.items_by_risk_level.items()}

    @property
    def size_by_risk_level(self) -> dict[RiskLevel, int]:
        """Total size per risk level."""
        return {
            level: sum(item.size for item in items)
            for level, items in self.items_by_risk_level.items()
        }

    @property
    def safe_items(self) -> list[CleanupItem]:
        """Only the items classified as safe."""
        return [item for item in self.items if item.risk_level == RiskLevel.SAFE]

    @property
    def safe_total_size(self) -> int:
        """Total size of the safe items."""
        return sum(item.size for item in self.safe_items)

    def without(self, item_ids: Iterable[UUID]) -> "ScanResult":
        """Build the result that supersedes this one after a cleanup.

        Args:
            item_ids: IDs of items that were removed successfully.

        Returns:
            New ScanResult without those items. Date, duration and
            scanned categories are carried over.
        """
        removed = set(item_ids)
        return ScanResult(
            items=[item for item in self.items if item.id not in removed],
            scan_duration=self.scan_duration,
            scanned_categories=list(self.scanned_categories),
            scan_date=self.scan_date,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": str(self.id),
            "items": [item.to_dict() for item in self.items],
            "scan_date": self.scan_date.isoformat(),
            "scan_duration": self.scan_duration,
            "scanned_categories": [c.value for c in self.scanned_categories],
            "total_size": self.total_size,
        }
