"""Unit tests for the large file scanner."""

import os
from pathlib import Path

from opencleaner.models.item import CleanupCategory, Language, RiskLevel
from opencleaner.scanners.large_files import LARGE_FILE_THRESHOLD, LargeFileScanner, is_package


def sparse_file(path: Path, size: int) -> Path:
    """Create a sparse file of the given apparent size."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


class TestIsPackage:
    """Tests for is_package."""

    def test_package_extensions(self) -> None:
        """Bundle extensions are recognised case-insensitively."""
        assert is_package("Xcode.app")
        assert is_package("Thing.BUNDLE")
        assert is_package("Photos Library.photoslibrary")
        assert not is_package("Documents")
        assert not is_package("movie.mov")


class TestLargeFileScanner:
    """Tests for LargeFileScanner."""

    def _scanner(self, tmp_path: Path, app_dirs: tuple[Path, ...] = ()) -> LargeFileScanner:
        return LargeFileScanner(home=tmp_path / "home", app_dirs=app_dirs)

    def test_categories(self, tmp_path: Path) -> None:
        """The scanner is registered as LARGE_FILES and also emits APPLICATIONS."""
        scanner = self._scanner(tmp_path)
        assert scanner.category == CleanupCategory.LARGE_FILES
        assert scanner.categories == (CleanupCategory.LARGE_FILES, CleanupCategory.APPLICATIONS)

    def test_threshold_is_strict(self, tmp_path: Path) -> None:
        """A file of exactly 100 MiB is excluded; one byte more is included."""
        home = tmp_path / "home"
        sparse_file(home / "Downloads" / "exact.iso", LARGE_FILE_THRESHOLD)
        sparse_file(home / "Downloads" / "over.iso", LARGE_FILE_THRESHOLD + 1)

        items = self._scanner(tmp_path).scan()

        assert [item.name for item in items] == ["over.iso"]
        item = items[0]
        assert item.size == LARGE_FILE_THRESHOLD + 1
        assert item.category == CleanupCategory.LARGE_FILES
        assert item.risk_level == RiskLevel.CAUTION
        assert item.reason.localized(Language.EN) == "Large File. Ensure it is not needed."

    def test_excluded_top_level_directories(self, tmp_path: Path) -> None:
        """Library, Public and Desktop are skipped at the top of home only."""
        home = tmp_path / "home"
        for name in ("Library", "Public", "Desktop"):
            sparse_file(home / name / "big.bin", LARGE_FILE_THRESHOLD + 1)
        sparse_file(home / "Projects" / "Library" / "big.bin", LARGE_FILE_THRESHOLD + 1)

        items = self._scanner(tmp_path).scan()

        assert [item.path for item in items] == [home / "Projects" / "Library" / "big.bin"]

    def test_hidden_entries_skipped(self, tmp_path: Path) -> None:
        """Hidden files and directories are not scanned."""
        home = tmp_path / "home"
        sparse_file(home / ".cache" / "big.bin", LARGE_FILE_THRESHOLD + 1)
        sparse_file(home / ".big.bin", LARGE_FILE_THRESHOLD + 1)

        assert self._scanner(tmp_path).scan() == []

    def test_packages_are_atomic(self, tmp_path: Path) -> None:
        """Applications are reported whole with their recursive size."""
        apps = tmp_path / "Applications"
        half = LARGE_FILE_THRESHOLD // 2 + 1
        sparse_file(apps / "Huge.app" / "Contents" / "MacOS" / "Huge", half)
        sparse_file(apps / "Huge.app" / "Contents" / "Resources" / "data", half)
        sparse_file(apps / "Tiny.app" / "Contents" / "MacOS" / "Tiny", 10)
        (tmp_path / "home").mkdir()

        items = self._scanner(tmp_path, app_dirs=(apps,)).scan()

        assert len(items) == 1
        item = items[0]
        assert item.path == apps / "Huge.app"
        assert item.size == 2 * half
        assert item.category == CleanupCategory.APPLICATIONS
        assert "Large Application" in item.reason.localized(Language.EN)

    def test_non_app_packages_are_large_files(self, tmp_path: Path) -> None:
        """Non-.app bundles are treated atomically but categorised as large files."""
        home = tmp_path / "home"
        sparse_file(home / "Music" / "Sounds.bundle" / "data", LARGE_FILE_THRESHOLD + 1)

        items = self._scanner(tmp_path).scan()

        assert [(item.name, item.category) for item in items] == [
            ("Sounds.bundle", CleanupCategory.LARGE_FILES)
        ]

    def test_symlinks_ignored(self, tmp_path: Path) -> None:
        """Symbolic links to large files are not reported twice."""
        home = tmp_path / "home"
        target = sparse_file(home / "Movies" / "film.mov", LARGE_FILE_THRESHOLD + 1)
        os.symlink(target, home / "film-link.mov")

        items = self._scanner(tmp_path).scan()

        assert [item.path for item in items] == [target]
