"""Cleanup item models.

This module defines the core data structures describing a single
reclaimable filesystem object: its category, its deletion-safety
classification, and the bilingual reason shown to the user.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

from opencleaner.utils.fs import format_size


class Language(str, Enum):
    """Display language for reasons and reports."""

    EN = "en"
    JA = "ja"


class RiskLevel(str, Enum):
    """Deletion-safety classification of a cleanup item.

    Attributes:
        SAFE: Deleting has no expected impact on the system.
        CAUTION: Deleting may reduce convenience.
        RISKY: Requires user attention (e.g., a permission gap).
    """

    SAFE = "safe"
    CAUTION = "caution"
    RISKY = "risky"

    def display_name(self, language: Language = Language.EN) -> str:
        """Return the human-readable name in the given language."""
        return _RISK_NAMES[self][language]

    def description(self, language: Language = Language.EN) -> str:
        """Return a one-sentence explanation of the risk level."""
        return _RISK_DESCRIPTIONS[self][language]

    @property
    def emoji(self) -> str:
        """Traffic-light marker used in reports."""
        return _RISK_EMOJI[self]


_RISK_NAMES: dict[RiskLevel, dict[Language, str]] = {
    RiskLevel.SAFE: {Language.EN: "Safe", Language.JA: "安全"},
    RiskLevel.CAUTION: {Language.EN: "Caution", Language.JA: "注意"},
    RiskLevel.RISKY: {Language.EN: "Risky", Language.JA: "危険"},
}

_RISK_DESCRIPTIONS: dict[RiskLevel, dict[Language, str]] = {
    RiskLevel.SAFE: {
        Language.EN: "Deleting this file will not affect your system.",
        Language.JA: "削除してもシステムに影響はありません。",
    },
    RiskLevel.CAUTION: {
        Language.EN: "Deleting may reduce convenience. Consider before removing.",
        Language.JA: "削除すると利便性が下がる可能性があります。",
    },
    RiskLevel.RISKY: {
        Language.EN: "Deleting may require reconfiguration. Proceed with caution.",
        Language.JA: "削除すると再設定が必要になる可能性があります。",
    },
}

_RISK_EMOJI: dict[RiskLevel, str] = {
    RiskLevel.SAFE: "\U0001f7e2",  # green circle
    RiskLevel.CAUTION: "\U0001f7e1",  # yellow circle
    RiskLevel.RISKY: "\U0001f534",  # red circle
}


class CleanupCategory(str, Enum):
    """Category of a cleanup item, one per scanning strategy."""

    USER_CACHE = "user_cache"
    LOGS = "logs"
    ORPHANED_APP_DATA = "orphaned_app_data"
    BROKEN_PREFS = "broken_prefs"
    TRASH = "trash"
    LARGE_FILES = "large_files"
    APPLICATIONS = "applications"

    def display_name(self, language: Language = Language.EN) -> str:
        """Return the human-readable name in the given language."""
        return _CATEGORY_NAMES[self][language]


_CATEGORY_NAMES: dict[CleanupCategory, dict[Language, str]] = {
    CleanupCategory.USER_CACHE: {Language.EN: "User Cache", Language.JA: "ユーザーキャッシュ"},
    CleanupCategory.LOGS: {Language.EN: "User Logs", Language.JA: "ユーザーログ"},
    CleanupCategory.ORPHANED_APP_DATA: {
        Language.EN: "Orphaned App Data",
        Language.JA: "未使用アプリデータ",
    },
    CleanupCategory.BROKEN_PREFS: {Language.EN: "Broken Preferences", Language.JA: "壊れた環境設定"},
    CleanupCategory.TRASH: {Language.EN: "Trash", Language.JA: "ゴミ箱"},
    CleanupCategory.LARGE_FILES: {Language.EN: "Large Files", Language.JA: "大容量ファイル"},
    CleanupCategory.APPLICATIONS: {Language.EN: "Applications", Language.JA: "アプリケーション"},
}


@dataclass(frozen=True, slots=True)
class LocalizedReason:
    """Bilingual justification text for a cleanup item.

    Attributes:
        en: English text.
        ja: Japanese text.
    """

    en: str
    ja: str

    def localized(self, language: Language = Language.EN) -> str:
        """Return the text for the requested language."""
        if language == Language.JA:
            return self.ja
        return self.en


@dataclass(frozen=True, slots=True)
class CleanupItem:
    """Represents one discovered, deletable filesystem object.

    This is an immutable data structure. The risk level and reason are
    computed once by the producing scanner and never change afterwards;
    a re-scan produces new items.

    Attributes:
        path: Absolute filesystem path.
        size: Size in bytes (recursive for directory-like items).
        category: Category of the scanner that produced this item.
        risk_level: Deletion-safety classification.
        reason: Bilingual justification derived from the classification signals.
        last_accessed: Last access time, if known.
        last_modified: Last modification time, if known.
        parent_app: Best-effort name of the owning application.
        id: Unique identifier assigned at discovery.
    """

    path: Path
    size: int
    category: CleanupCategory
    risk_level: RiskLevel
    reason: LocalizedReason
    last_accessed: datetime | None = field(default=None)
    last_modified: datetime | None = field(default=None)
    parent_app: str | None = field(default=None)
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if self.size < 0:
            msg = f"Size cannot be negative, got {self.size}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Last path component, used as a display label."""
        return self.path.name

    @property
    def size_human(self) -> str:
        """Return human-readable size string."""
        return format_size(self.size)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": str(self.id),
            "path": str(self.path),
            "size": self.size,
            "category": self.category.value,
            "risk_level": self.risk_level.value,
            "reason": {"en": self.reason.en, "ja": self.reason.ja},
            "last_accessed": _isoformat(self.last_accessed),
            "last_modified": _isoformat(self.last_modified),
            "parent_app": self.parent_app,
        }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
