"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from opencleaner.core.theme import get_theme

if TYPE_CHECKING:
    from opencleaner.models.item import CleanupItem, Language, RiskLevel


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_items_table(title: str = "Cleanup Candidates") -> Table:
    """Create a pre-configured table for displaying cleanup items.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for item display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Name", no_wrap=True)
    table.add_column("Category", style="muted")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Reason", style="text", overflow="ellipsis")
    return table


def risk_style(level: RiskLevel) -> str:
    """Return the theme style name for a risk level."""
    return f"risk_{level.value}"


def format_item_row(item: CleanupItem, language: Language) -> tuple[str, str, str, str, str]:
    """Format a cleanup item as a table row with proper styling.

    Args:
        item: The item to format.
        language: Language for category names and reasons.

    Returns:
        Tuple of (marker, name, category, size, reason) with Rich markup.
    """
    style = risk_style(item.risk_level)
    marker = f"[{style}]●[/]"
    name = f"[{style}]{item.name}[/]"
    category = f"[muted]{item.category.display_name(language)}[/]"
    size = f"[info]{item.size_human}[/]"
    reason = f"[text]{item.reason.localized(language)}[/]"
    return (marker, name, category, size, reason)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
