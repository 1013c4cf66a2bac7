"""Report generation for scan results.

Supports a machine-readable JSON rendering and a bilingual Markdown
report with summary, risk-level and category breakdowns, and a capped
per-risk-level item listing.
"""

import json
from datetime import datetime
from enum import Enum

from opencleaner.models.item import CleanupCategory, Language, RiskLevel
from opencleaner.models.scan_result import ScanResult
from opencleaner.utils.fs import format_size

# Detailed listing shows at most this many items per risk level
MAX_DETAILED_ITEMS = 20


class ReportFormat(str, Enum):
    """Output format of a report."""

    JSON = "json"
    MARKDOWN = "markdown"


_TEXT: dict[Language, dict[str, str]] = {
    Language.EN: {
        "title": "# 🔍 OpenCleaner Scan Report",
        "summary": "## 📊 Summary",
        "table_header": "| Property | Value |",
        "table_rule": "|----------|-------|",
        "items_found": "Items Found",
        "total_size": "Total Size",
        "duration": "Scan Duration",
        "duration_unit": "s",
        "safe_size": "Safe to Delete",
        "risk_header": "## 🚦 Risk Level Breakdown",
        "category_header": "## 📁 Category Breakdown",
        "detail_header": "## 📋 Detailed Items",
        "items_size": "{count} items, {size}",
        "risk_line": "- {emoji} **{name}**: {count} items ({size})",
        "path": "Path",
        "more": "...and {count} more",
    },
    Language.JA: {
        "title": "# 🔍 OpenCleaner スキャンレポート",
        "summary": "## 📊 サマリー",
        "table_header": "| 項目 | 値 |",
        "table_rule": "|------|-----|",
        "items_found": "検出アイテム数",
        "total_size": "合計サイズ",
        "duration": "スキャン時間",
        "duration_unit": "秒",
        "safe_size": "安全に削除可能",
        "risk_header": "## 🚦 リスクレベル別",
        "category_header": "## 📁 カテゴリ別",
        "detail_header": "## 📋 詳細リスト",
        "items_size": "{count} 件, {size}",
        "risk_line": "- {emoji} **{name}**: {count} 件 ({size})",
        "path": "パス",
        "more": "...他 {count} 件",
    },
}


class ReportGenerator:
    """Renders a ScanResult as JSON or Markdown.

    Args:
        format: Output format.
        language: Language of headings and item reasons (Markdown only).
    """

    def __init__(
        self,
        format: ReportFormat = ReportFormat.MARKDOWN,
        language: Language = Language.EN,
    ) -> None:
        self._format = format
        self._language = language
        self._text = _TEXT[language]

    def generate(self, result: ScanResult) -> str:
        """Render the result in the configured format."""
        if self._format == ReportFormat.JSON:
            return self._generate_json(result)
        return self._generate_markdown(result)

    def _generate_json(self, result: ScanResult) -> str:
        return json.dumps(result.to_dict(), indent=2, sort_keys=True, ensure_ascii=False)

    def _generate_markdown(self, result: ScanResult) -> str:
        sections = [
            "\n".join([self._text["title"], "", self._format_date(result.scan_date), ""]),
            self._summary(result),
            "",
            self._risk_breakdown(result),
            "",
            self._category_breakdown(result),
            "",
            self._detailed_items(result),
        ]
        return "\n".join(sections)

    def _format_date(self, moment: datetime) -> str:
        local = moment.astimezone()
        if self._language == Language.JA:
            return local.strftime("%Y年%m月%d日 %H:%M:%S")
        return local.strftime("%B %d, %Y at %H:%M:%S")

    def _summary(self, result: ScanResult) -> str:
        t = self._text
        return "\n".join(
            [
                t["summary"],
                "",
                t["table_header"],
                t["table_rule"],
                f"| {t['items_found']} | {len(result.items)} |",
                f"| {t['total_size']} | {result.total_size_human} |",
                f"| {t['duration']} | {result.scan_duration:.2f}{t['duration_unit']} |",
                f"| {t['safe_size']} | {format_size(result.safe_total_size)} |",
            ]
        )

    def _risk_breakdown(self, result: ScanResult) -> str:
        counts = result.risk_level_counts
        sizes = result.size_by_risk_level

        lines = [self._text["risk_header"], ""]
        for level in RiskLevel:
            lines.append(
                self._text["risk_line"].format(
                    emoji=level.emoji,
                    name=level.display_name(self._language),
                    count=counts.get(level, 0),
                    size=format_size(sizes.get(level, 0)),
                )
            )
        return "\n".join(lines)

    def _category_breakdown(self, result: ScanResult) -> str:
        grouped = result.items_by_category

        lines = [self._text["category_header"], ""]
        for category in CleanupCategory:
            items = grouped.get(category)
            if not items:
                continue
            size = sum(item.size for item in items)
            lines.append(f"### {category.display_name(self._language)}")
            lines.append("")
            lines.append(self._text["items_size"].format(count=len(items), size=format_size(size)))
            lines.append("")
        return "\n".join(lines)

    def _detailed_items(self, result: ScanResult) -> str:
        grouped = result.items_by_risk_level

        lines = [self._text["detail_header"], ""]
        for level in RiskLevel:
            items = grouped.get(level)
            if not items:
                continue

            lines.append(f"### {level.emoji} {level.display_name(self._language)}")
            lines.append("")
            for item in items[:MAX_DETAILED_ITEMS]:
                lines.append(f"- **{item.name}** ({item.size_human})")
                lines.append(f"  - {self._text['path']}: `{item.path}`")
                lines.append(f"  - {item.reason.localized(self._language)}")
                lines.append("")

            hidden = len(items) - MAX_DETAILED_ITEMS
            if hidden > 0:
                lines.append(f"*{self._text['more'].format(count=hidden)}*")
                lines.append("")

        return "\n".join(lines)
