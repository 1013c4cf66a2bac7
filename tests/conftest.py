"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from opencleaner.models.item import CleanupCategory, CleanupItem, LocalizedReason, RiskLevel

ItemFactory = Callable[..., CleanupItem]


@pytest.fixture
def now() -> datetime:
    """Fixed current time for age classification."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_item(tmp_path: Path) -> ItemFactory:
    """Factory creating CleanupItems with sensible defaults."""

    def _make(
        name: str = "item",
        size: int = 100,
        category: CleanupCategory = CleanupCategory.USER_CACHE,
        risk_level: RiskLevel = RiskLevel.SAFE,
        path: Path | None = None,
    ) -> CleanupItem:
        return CleanupItem(
            path=path or tmp_path / name,
            size=size,
            category=category,
            risk_level=risk_level,
            reason=LocalizedReason(en=f"Reason for {name}", ja=f"{name} の理由"),
        )

    return _make


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Factory creating files of a given size, optionally backdated."""

    def _write(
        path: Path, size: int = 0, age: timedelta | None = None, now: datetime | None = None
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        if age is not None:
            moment = ((now or datetime.now(UTC)) - age).timestamp()
            os.utime(path, (moment, moment))
        return path

    return _write
