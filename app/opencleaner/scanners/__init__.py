"""Cleanup scanners for the different junk categories.

This module exports the scanner classes and a helper that builds the
default scanner set.
"""

from opencleaner.scanners.app_data import AppDataScanner
from opencleaner.scanners.base import Scanner
from opencleaner.scanners.cache import CacheScanner
from opencleaner.scanners.large_files import LargeFileScanner
from opencleaner.scanners.logs import LogScanner
from opencleaner.scanners.preferences import OrphanedPrefsScanner
from opencleaner.scanners.trash import TrashScanner


def default_scanners() -> list[Scanner]:
    """Create one scanner per category, rooted at the current user's home."""
    return [
        CacheScanner(),
        LogScanner(),
        AppDataScanner(),
        OrphanedPrefsScanner(),
        TrashScanner(),
        LargeFileScanner(),
    ]


__all__ = [
    "AppDataScanner",
    "CacheScanner",
    "LargeFileScanner",
    "LogScanner",
    "OrphanedPrefsScanner",
    "Scanner",
    "TrashScanner",
    "default_scanners",
]
