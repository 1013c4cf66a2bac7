"""Unit tests for cleanup item models."""

from datetime import UTC, datetime
from pathlib import Path
from uuid import UUID

import pytest
from opencleaner.models.item import (
    CleanupCategory,
    CleanupItem,
    Language,
    LocalizedReason,
    RiskLevel,
)


class TestRiskLevel:
    """Tests for RiskLevel enum."""

    def test_values(self) -> None:
        """RiskLevel has the expected string values."""
        assert RiskLevel.SAFE.value == "safe"
        assert RiskLevel.CAUTION.value == "caution"
        assert RiskLevel.RISKY.value == "risky"

    def test_display_names(self) -> None:
        """Display names are available in both languages."""
        assert RiskLevel.SAFE.display_name() == "Safe"
        assert RiskLevel.SAFE.display_name(Language.JA) == "安全"
        assert RiskLevel.CAUTION.display_name(Language.JA) == "注意"
        assert RiskLevel.RISKY.display_name(Language.JA) == "危険"

    def test_every_level_has_description_and_emoji(self) -> None:
        """Every level has a description and a distinct emoji."""
        for level in RiskLevel:
            assert level.description(Language.EN)
            assert level.description(Language.JA)
        assert len({level.emoji for level in RiskLevel}) == 3


class TestCleanupCategory:
    """Tests for CleanupCategory enum."""

    def test_all_categories_present(self) -> None:
        """All seven categories exist."""
        assert {c.value for c in CleanupCategory} == {
            "user_cache",
            "logs",
            "orphaned_app_data",
            "broken_prefs",
            "trash",
            "large_files",
            "applications",
        }

    def test_display_names(self) -> None:
        """Every category has English and Japanese names."""
        assert CleanupCategory.TRASH.display_name() == "Trash"
        assert CleanupCategory.TRASH.display_name(Language.JA) == "ゴミ箱"
        for category in CleanupCategory:
            assert category.display_name(Language.JA)


class TestLocalizedReason:
    """Tests for LocalizedReason."""

    def test_localized(self) -> None:
        """localized() picks the requested language."""
        reason = LocalizedReason(en="Hello", ja="こんにちは")
        assert reason.localized(Language.EN) == "Hello"
        assert reason.localized(Language.JA) == "こんにちは"
        assert reason.localized() == "Hello"


class TestCleanupItem:
    """Tests for CleanupItem dataclass."""

    def _item(self, **kwargs: object) -> CleanupItem:
        defaults: dict[str, object] = {
            "path": Path("/Users/me/Library/Caches/com.example.App"),
            "size": 2048,
            "category": CleanupCategory.USER_CACHE,
            "risk_level": RiskLevel.SAFE,
            "reason": LocalizedReason(en="why", ja="なぜ"),
        }
        defaults.update(kwargs)
        return CleanupItem(**defaults)  # type: ignore[arg-type]

    def test_generates_unique_ids(self) -> None:
        """Each item gets a fresh UUID."""
        first = self._item()
        second = self._item()
        assert isinstance(first.id, UUID)
        assert first.id != second.id

    def test_rejects_negative_size(self) -> None:
        """Negative sizes are rejected."""
        with pytest.raises(ValueError):
            self._item(size=-1)

    def test_zero_size_allowed(self) -> None:
        """Zero-byte items are valid."""
        assert self._item(size=0).size == 0

    def test_name_and_size_human(self) -> None:
        """name is the last path component and size_human is formatted."""
        item = self._item()
        assert item.name == "com.example.App"
        assert item.size_human == "2.0 KB"

    def test_is_frozen(self) -> None:
        """Items are immutable."""
        item = self._item()
        with pytest.raises(AttributeError):
            item.size = 1  # type: ignore[misc]

    def test_to_dict(self) -> None:
        """to_dict produces JSON-friendly values with ISO timestamps."""
        modified = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        item = self._item(last_modified=modified, parent_app="com.example.App")

        data = item.to_dict()

        assert data["id"] == str(item.id)
        assert data["path"] == "/Users/me/Library/Caches/com.example.App"
        assert data["size"] == 2048
        assert data["category"] == "user_cache"
        assert data["risk_level"] == "safe"
        assert data["reason"] == {"en": "why", "ja": "なぜ"}
        assert data["last_modified"] == "2024-01-15T10:30:00+00:00"
        assert data["last_accessed"] is None
        assert data["parent_app"] == "com.example.App"
