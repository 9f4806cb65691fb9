"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from reclaim.core.theme import get_theme

if TYPE_CHECKING:
    from reclaim.models.record import DeleteOutcome, FileRecord


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


def format_size_mb(size_mb: float) -> str:
    """Format a size in megabytes as a human-readable string.

    Args:
        size_mb: Size in megabytes.

    Returns:
        String such as "512 B", "3.4 KB", "12.0 MB" or "1.50 GB".
    """
    size_bytes = size_mb * 1048576
    if size_bytes < 1024:
        return f"{size_bytes:.0f} B"
    if size_bytes < 1048576:
        return f"{size_bytes / 1024:.1f} KB"
    if size_mb < 1024:
        return f"{size_mb:.1f} MB"
    return f"{size_mb / 1024:.2f} GB"


def create_record_table(title: str = "Reclaimable Files") -> Table:
    """Create a pre-configured table for displaying scan records.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for record display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("", width=2, justify="center")
    table.add_column("ID", style="muted", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Path", style="text", overflow="fold")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Reason", style="dim")
    return table


def format_record_row(record: FileRecord) -> tuple[str, str, str, str, str, str]:
    """Format a record as a table row with proper styling.

    Pre-selected records get a filled marker, others an empty one.

    Args:
        record: The record to format.

    Returns:
        Tuple of (marker, id, category, path, size, reason) with Rich markup.
    """
    style = f"category.{record.category.value}"
    marker = f"[{style}]●[/]" if record.selected else f"[{style}]○[/]"
    category = f"[{style}]{record.category.value}[/]"
    return (
        marker,
        record.id,
        category,
        record.path,
        format_size_mb(record.size_mb),
        record.reason,
    )


def create_outcome_table(outcomes: list[DeleteOutcome], records: dict[str, FileRecord]) -> Table:
    """Create a table summarizing deletion outcomes.

    Args:
        outcomes: Outcomes returned by the deletion engine.
        records: Records by id, used to show paths.

    Returns:
        Populated Rich Table.
    """
    table = Table(title="Deletion Results", header_style="bold_header", border_style="border")
    table.add_column("ID", style="muted", no_wrap=True)
    table.add_column("Path", style="bold")
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim")

    for outcome in outcomes:
        record = records.get(outcome.id)
        path = record.path if record else "-"
        if outcome.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would delete"
        elif outcome.success:
            status = "[success]deleted[/]"
            detail = ""
        else:
            status = "[error]failed[/]"
            detail = outcome.error or "Unknown error"
        table.add_row(outcome.id, path, status, detail)

    return table


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
