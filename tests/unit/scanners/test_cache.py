"""Unit tests for the user cache scanner."""

from datetime import datetime, timedelta
from pathlib import Path

from opencleaner.models.item import CleanupCategory, Language, RiskLevel
from opencleaner.scanners.cache import CacheScanner, classify_cache


class TestClassifyCache:
    """Tests for cache risk classification."""

    def test_system_patterns_always_safe(self, now: datetime) -> None:
        """Known system, cloud and Safari caches are safe regardless of age."""
        for name in ("com.apple.Music", "CloudKit", "Metadata", "com.apple.Safari"):
            assert classify_cache(name, now, now) == RiskLevel.SAFE
            assert classify_cache(name, None, now) == RiskLevel.SAFE

    def test_age_threshold(self, now: datetime) -> None:
        """Caches idle for more than 30 days are safe."""
        assert classify_cache("com.example.App", now - timedelta(days=31), now) == RiskLevel.SAFE
        assert classify_cache("com.example.App", now - timedelta(days=30), now) == RiskLevel.CAUTION
        assert classify_cache("com.example.App", now - timedelta(days=29), now) == RiskLevel.CAUTION

    def test_unknown_access_time(self, now: datetime) -> None:
        """Unknown access time is treated as caution."""
        assert classify_cache("com.example.App", None, now) == RiskLevel.CAUTION


class TestCacheScanner:
    """Tests for CacheScanner."""

    def _scanner(self, root: Path, now: datetime) -> CacheScanner:
        return CacheScanner(root=root, clock=lambda: now)

    def test_category(self, tmp_path: Path, now: datetime) -> None:
        """CacheScanner reports USER_CACHE."""
        assert self._scanner(tmp_path, now).category == CleanupCategory.USER_CACHE

    def test_missing_root(self, tmp_path: Path, now: datetime) -> None:
        """A missing Caches directory yields no items."""
        assert self._scanner(tmp_path / "missing", now).scan() == []

    def test_groups_by_top_level_directory(
        self, tmp_path: Path, now: datetime, write_file
    ) -> None:
        """Files are aggregated per top-level directory."""
        write_file(tmp_path / "com.example.App" / "a.db", 100)
        write_file(tmp_path / "com.example.App" / "nested" / "b.db", 50)
        write_file(tmp_path / "org.other.Tool" / "c.bin", 10)

        items = self._scanner(tmp_path, now).scan()

        by_name = {item.name: item for item in items}
        assert set(by_name) == {"com.example.App", "org.other.Tool"}
        assert by_name["com.example.App"].size == 150
        assert by_name["com.example.App"].path == tmp_path / "com.example.App"
        assert by_name["com.example.App"].parent_app == "com.example.App"
        assert all(item.category == CleanupCategory.USER_CACHE for item in items)

    def test_root_level_file_is_its_own_group(
        self, tmp_path: Path, now: datetime, write_file
    ) -> None:
        """A file directly under Caches forms its own group."""
        write_file(tmp_path / "loose.cache", 30)

        items = self._scanner(tmp_path, now).scan()

        assert len(items) == 1
        assert items[0].name == "loose.cache"
        assert items[0].size == 30

    def test_skips_hidden_and_empty(self, tmp_path: Path, now: datetime, write_file) -> None:
        """Hidden entries are ignored and zero-byte groups dropped."""
        write_file(tmp_path / ".hidden" / "data", 100)
        write_file(tmp_path / "com.example.App" / ".DS_Store", 100)
        write_file(tmp_path / "com.example.Empty" / "empty", 0)

        assert self._scanner(tmp_path, now).scan() == []

    def test_classifies_by_latest_access(
        self, tmp_path: Path, now: datetime, write_file
    ) -> None:
        """The most recently accessed file decides the group's age."""
        write_file(tmp_path / "com.old.App" / "a", 10, age=timedelta(days=31), now=now)
        write_file(tmp_path / "com.recent.App" / "a", 10, age=timedelta(days=40), now=now)
        write_file(tmp_path / "com.recent.App" / "b", 10, age=timedelta(days=29), now=now)

        items = {item.name: item for item in self._scanner(tmp_path, now).scan()}

        assert items["com.old.App"].risk_level == RiskLevel.SAFE
        assert "31 days" in items["com.old.App"].reason.localized(Language.EN)
        assert items["com.recent.App"].risk_level == RiskLevel.CAUTION
        assert items["com.recent.App"].last_accessed is not None
