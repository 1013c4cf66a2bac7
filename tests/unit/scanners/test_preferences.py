"""Unit tests for the orphaned preferences scanner."""

from pathlib import Path

import pytest
from opencleaner.models.item import CleanupCategory, Language, RiskLevel
from opencleaner.scanners.preferences import OrphanedPrefsScanner, extract_bundle_identifier


class TestExtractBundleIdentifier:
    """Tests for extract_bundle_identifier."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("com.example.App", "com.example.App"),
            ("com.example.App.helper", "com.example.App"),
            ("org.videolan.vlc", "org.videolan.vlc"),
            ("net.whatever.thing.extra", "net.whatever.thing"),
            ("com.short", "com.short"),
            ("loginwindow", None),
            ("io.example.App", None),
        ],
    )
    def test_extracts(self, name: str, expected: str | None) -> None:
        """Reverse-DNS names yield at most three components; others None."""
        assert extract_bundle_identifier(name) == expected


class TestOrphanedPrefsScanner:
    """Tests for OrphanedPrefsScanner."""

    def _scanner(self, root: Path, installed: set[str]) -> OrphanedPrefsScanner:
        return OrphanedPrefsScanner(root=root, installed_apps=lambda: installed)

    def test_category(self, tmp_path: Path) -> None:
        """OrphanedPrefsScanner reports BROKEN_PREFS."""
        assert self._scanner(tmp_path, set()).category == CleanupCategory.BROKEN_PREFS

    def test_reports_orphans_only(self, tmp_path: Path, write_file) -> None:
        """Plists of uninstalled apps are reported; everything else skipped."""
        write_file(tmp_path / "com.gone.App.plist", 300)
        write_file(tmp_path / "com.installed.App.plist", 300)
        write_file(tmp_path / "com.apple.finder.plist", 300)
        write_file(tmp_path / "com.gone.App.ByHost.ABC123.plist", 300)
        write_file(tmp_path / "loginwindow.plist", 300)
        write_file(tmp_path / ".hidden.plist", 300)
        write_file(tmp_path / "com.gone.Other.txt", 300)
        write_file(tmp_path / "ByHost" / "com.gone.Nested.plist", 300)

        items = self._scanner(tmp_path, {"com.installed.App"}).scan()

        assert [item.name for item in items] == ["com.gone.App.plist"]
        item = items[0]
        assert item.risk_level == RiskLevel.CAUTION
        assert item.parent_app == "com.gone.App"
        assert item.size == 300
        assert "Last modified" in item.reason.localized(Language.EN)

    def test_uppercase_extension(self, tmp_path: Path, write_file) -> None:
        """The .plist extension is matched case-insensitively."""
        write_file(tmp_path / "org.gone.Tool.PLIST", 10)

        items = self._scanner(tmp_path, set()).scan()

        assert [item.parent_app for item in items] == ["org.gone.Tool"]

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing Preferences directory yields no items."""
        assert self._scanner(tmp_path / "missing", set()).scan() == []
