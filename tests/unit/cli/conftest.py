"""Fixtures shared by the CLI command tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from opencleaner.core.engine import ScanEngine
from opencleaner.core.safety import SafetyManager
from opencleaner.models.item import CleanupCategory, CleanupItem
from opencleaner.scanners.base import Scanner


class StaticScanner(Scanner):
    """Scanner returning a fixed list of items."""

    def __init__(self, category: CleanupCategory, items: list[CleanupItem]) -> None:
        self._category = category
        self._items = items

    @property
    def category(self) -> CleanupCategory:
        return self._category

    def scan(self) -> list[CleanupItem]:
        return list(self._items)


class BrokenScanner(StaticScanner):
    """Scanner whose category cannot be enumerated."""

    def scan(self) -> list[CleanupItem]:
        raise OSError("Operation not permitted")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at an empty temporary location."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "opencleaner" / "config.toml"


@pytest.fixture
def engine_factory() -> Callable[[list[CleanupItem]], Callable[[], ScanEngine]]:
    """Build a create_engine replacement serving the given items.

    Items are grouped into one scanner per category.
    """

    def _factory(items: list[CleanupItem]) -> Callable[[], ScanEngine]:
        def _create() -> ScanEngine:
            engine = ScanEngine(max_workers=2)
            by_category: dict[CleanupCategory, list[CleanupItem]] = {}
            for item in items:
                by_category.setdefault(item.category, []).append(item)
            for category in CleanupCategory:
                engine.register(StaticScanner(category, by_category.get(category, [])))
            return engine

        return _create

    return _factory


@pytest.fixture
def trash_dir(tmp_path: Path) -> Path:
    """Temporary Trash directory."""
    path = tmp_path / ".Trash"
    path.mkdir()
    return path


@pytest.fixture
def safety_manager(trash_dir: Path) -> SafetyManager:
    """SafetyManager moving items into the temporary Trash."""
    return SafetyManager(trash_dir=trash_dir)


@pytest.fixture
def broken_engine() -> ScanEngine:
    """Engine whose only scanner fails."""
    engine = ScanEngine()
    engine.register(BrokenScanner(CleanupCategory.TRASH, []))
    return engine
