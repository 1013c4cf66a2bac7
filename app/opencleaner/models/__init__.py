"""Data models for opencleaner.

This module exports the core data structures used throughout the application.
"""

from opencleaner.models.cleanup_result import CleanupResult
from opencleaner.models.item import (
    CleanupCategory,
    CleanupItem,
    Language,
    LocalizedReason,
    RiskLevel,
)
from opencleaner.models.scan_result import ScanResult

__all__ = [
    "CleanupCategory",
    "CleanupItem",
    "CleanupResult",
    "Language",
    "LocalizedReason",
    "RiskLevel",
    "ScanResult",
]
