"""Display helpers shared by the scan, delete and clean commands."""

import json
import time
from pathlib import Path
from typing import Any

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from reclaim.core.errors import OperationInProgressError, SnapshotError
from reclaim.core.orchestrator import ScanOrchestrator
from reclaim.core.snapshot import ScanSnapshot, save_snapshot
from reclaim.models.record import DeleteOutcome, FileRecord
from reclaim.models.status import ScanOptions
from reclaim.utils.formatting import (
    console,
    create_outcome_table,
    create_record_table,
    err_console,
    format_record_row,
    format_size_mb,
    print_error,
    print_info,
    print_success,
    print_warning,
)

# Seconds between status polls while a scan runs
_POLL_INTERVAL = 0.1


def run_scan(
    orchestrator: ScanOrchestrator,
    options: ScanOptions,
    show_progress: bool = True,
) -> list[FileRecord]:
    """Run a scan, rendering its status as a live progress bar.

    The scan runs on the orchestrator's worker thread while this thread
    polls status(). Ctrl+C cancels the scan and keeps partial results.

    Args:
        orchestrator: Orchestrator to scan with.
        options: Scan options.
        show_progress: Render the progress bar on stderr.

    Returns:
        Records found.
    """
    try:
        future = orchestrator.start(options)
    except OperationInProgressError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            console=err_console,
            transient=True,
            disable=not show_progress,
        ) as progress:
            task = progress.add_task("Collecting files...", total=None)
            while not future.done():
                status = orchestrator.status()
                progress.update(
                    task,
                    description=status.current,
                    completed=status.overall_progress,
                    total=status.overall_total or None,
                )
                time.sleep(_POLL_INTERVAL)
    except KeyboardInterrupt:
        orchestrator.cancel()
        print_warning("Scan cancelled, keeping partial results.")

    try:
        return future.result()
    finally:
        orchestrator.shutdown()


def persist_snapshot(records: list[FileRecord], roots: list[Path]) -> None:
    """Save records as the last scan, warning on failure."""
    try:
        save_snapshot(ScanSnapshot.create(records, roots))
    except SnapshotError as e:
        print_warning(str(e))


def records_to_json(records: list[FileRecord]) -> list[dict[str, Any]]:
    """Convert records to JSON-ready dictionaries."""
    return [r.to_dict() for r in records]


def print_records(records: list[FileRecord], title: str = "Reclaimable Files") -> None:
    """Display records as a Rich table."""
    table = create_record_table(title)
    for record in records:
        table.add_row(*format_record_row(record))
    console.print(table)


def print_records_json(records: list[FileRecord]) -> None:
    """Display records as JSON."""
    console.print_json(json.dumps(records_to_json(records)))


def export_records(records: list[FileRecord], export_path: Path) -> None:
    """Export records to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(records_to_json(records), indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e


def print_summary(records: list[FileRecord]) -> None:
    """Print per-category counts and the reclaimable total."""
    counts: dict[str, int] = {}
    for record in records:
        counts[record.category.value] = counts.get(record.category.value, 0) + 1

    total_mb = sum(r.size_mb for r in records)
    breakdown = ", ".join(f"{count} {name}" for name, count in counts.items())
    console.print(
        f"\n[dim]Found {len(records)} items ({format_size_mb(total_mb)} reclaimable)"
        f"{': ' + breakdown if breakdown else ''}[/dim]"
    )


def confirm_deletion(count: int, secure: bool) -> None:
    """Ask for confirmation, exiting cleanly if declined."""
    action = "securely delete" if secure else "delete"
    confirmed = typer.confirm(f"\nProceed to {action} {count} file(s)?", default=False)
    if not confirmed:
        print_info("Aborted.")
        raise typer.Exit(code=0)


def print_outcomes(outcomes: list[DeleteOutcome], records: dict[str, FileRecord]) -> None:
    """Display deletion outcomes and a one-line summary."""
    console.print(create_outcome_table(outcomes, records))

    def files(selected: list[DeleteOutcome]) -> int:
        # One file may stand behind several records
        return len({records[o.id].path if o.id in records else o.id for o in selected})

    success_count = files([o for o in outcomes if o.success])
    fail_count = files([o for o in outcomes if not o.success])
    dry_count = files([o for o in outcomes if o.dry_run])

    if dry_count:
        print_info(f"Dry-run: {dry_count} file(s) would be deleted.")
    elif fail_count:
        print_warning(f"{success_count} succeeded, {fail_count} failed")
    else:
        print_success(f"All {success_count} file(s) deleted.")
