"""Shared types and factories for CLI commands.

Commands build their engine and safety manager through these helpers so
tests can swap them out in one place.
"""

from enum import Enum

from opencleaner.core.config import OpenCleanerConfig
from opencleaner.core.engine import ScanEngine
from opencleaner.core.safety import SafetyManager
from opencleaner.models.item import CleanupCategory
from opencleaner.scanners import default_scanners


class OutputFormat(str, Enum):
    """Output format options for scan results."""

    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


# Categories skipped by quick scans (walking the whole home directory is slow)
SLOW_CATEGORIES: frozenset[CleanupCategory] = frozenset(
    {CleanupCategory.LARGE_FILES, CleanupCategory.APPLICATIONS}
)


def create_engine() -> ScanEngine:
    """Create a scan engine with the default scanner set registered."""
    engine = ScanEngine()
    engine.register_all(default_scanners())
    return engine


def create_safety_manager(config: OpenCleanerConfig) -> SafetyManager:
    """Create a safety manager honouring the user's whitelist entries."""
    return SafetyManager(extra_whitelist=config.whitelist)


def quick_categories() -> list[CleanupCategory]:
    """Categories that can be scanned without walking the home directory."""
    return [category for category in CleanupCategory if category not in SLOW_CATEGORIES]
