"""Shared Rich display functions for scan and cleanup results.

Provides reusable table builders and summary printers used by the
survey, cleanup and doctor commands.
"""

from rich.table import Table

from opencleaner.models.cleanup_result import CleanupResult
from opencleaner.models.item import CleanupItem, Language, RiskLevel
from opencleaner.utils.fs import format_size
from opencleaner.utils.formatting import (
    console,
    create_items_table,
    format_item_row,
    print_success,
    risk_style,
)


def create_candidates_table(
    items: list[CleanupItem], language: Language, title: str = "Cleanup Candidates"
) -> Table:
    """Create a Rich table listing cleanup items.

    Args:
        items: Items to display, in display order.
        language: Language for category names and reasons.
        title: Table title.

    Returns:
        Rich Table with one row per item.
    """
    table = create_items_table(title)
    for item in items:
        table.add_row(*format_item_row(item, language))
    return table


def create_results_table(results: list[CleanupResult]) -> Table:
    """Create a Rich table displaying cleanup results.

    Successful results show "OK" and where the item went; failed results
    show "FAIL" with the error message.

    Args:
        results: List of cleanup results to display.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Item", no_wrap=True)
    table.add_column("Size", style="info", justify="right")
    table.add_column("Message")

    for result in results:
        if result.success:
            status = "[success]OK[/success]"
            message = f"Moved to {result.trashed_path}" if result.trashed_path else "Deleted"
        else:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"

        table.add_row(
            status,
            result.item.name,
            result.item.size_human,
            f"[muted]{message}[/muted]",
        )

    return table


def print_risk_breakdown(items: list[CleanupItem], language: Language) -> None:
    """Print item count and total size per risk level.

    Risk levels without items are omitted.
    """
    for level in RiskLevel:
        matching = [item for item in items if item.risk_level == level]
        if not matching:
            continue
        size = sum(item.size for item in matching)
        style = risk_style(level)
        console.print(
            f"  [{style}]●[/] {level.display_name(language)}: "
            f"{len(matching)} items ({format_size(size)})"
        )


def print_results_summary(results: list[CleanupResult]) -> None:
    """Print a summary of cleanup results.

    Shows the freed size when every item succeeded, or a count of
    succeeded/failed items when there are failures.

    Args:
        results: List of cleanup results.
    """
    succeeded = [r for r in results if r.success]
    fail_count = sum(1 for r in results if r.failed)
    freed = format_size(sum(r.item.size for r in succeeded))

    if fail_count == 0:
        print_success(f"All {len(succeeded)} item(s) cleaned up, {freed} freed.")
    else:
        console.print(
            f"\n[success]{len(succeeded)} succeeded[/success] ({freed}), "
            f"[error]{fail_count} failed[/error]"
        )
