"""Clean command implementation.

Scans and deletes every pre-selected record in one step.
"""

from pathlib import Path
from typing import Annotated

import typer

from reclaim.cli.display import (
    confirm_deletion,
    persist_snapshot,
    print_outcomes,
    print_records,
    run_scan,
)
from reclaim.core.config import load_config_or_default
from reclaim.core.errors import ConfigError
from reclaim.core.orchestrator import ScanOrchestrator
from reclaim.models.record import Category
from reclaim.models.status import ScanOptions
from reclaim.utils.formatting import print_error, print_success

app = typer.Typer(
    help="Scan and delete reclaimable files in one step.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_files(
    ctx: typer.Context,
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Clean only this directory instead of the default roots.",
        ),
    ] = None,
    duplicates: Annotated[
        bool,
        typer.Option("--duplicates/--no-duplicates", help="Delete duplicate files."),
    ] = True,
    logs: Annotated[
        bool,
        typer.Option("--logs/--no-logs", help="Delete log files."),
    ] = True,
    temp: Annotated[
        bool,
        typer.Option("--temp/--no-temp", help="Delete temp and cache files."),
    ] = True,
    include_empty: Annotated[
        bool,
        typer.Option("--include-empty", help="Also delete empty files."),
    ] = False,
    secure: Annotated[
        bool,
        typer.Option("--secure", help="Zero the start of each file before deleting."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Scan, then delete every pre-selected file.

    Empty files are found but never pre-selected; pass --include-empty
    to delete them too.
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    options = ScanOptions(
        duplicates=duplicates,
        logs=logs,
        temp=temp,
        empty=include_empty,
        path=str(path) if path is not None else None,
    )
    orchestrator = ScanOrchestrator(config)
    roots = orchestrator.resolve_roots(options)
    records = run_scan(orchestrator, options, show_progress=not quiet)

    targets = [r for r in records if r.selected or (include_empty and r.category == Category.EMPTY)]
    if not targets:
        persist_snapshot(records, roots)
        print_success("Nothing to reclaim. No matching files found.")
        return

    print_records(targets, title="Planned Deletions (dry-run)" if dry_run else "Planned Deletions")

    if not dry_run and not yes:
        confirm_deletion(len({r.path for r in targets}), secure)

    outcomes = orchestrator.delete([r.id for r in targets], secure=secure, dry_run=dry_run)
    print_outcomes(outcomes, {r.id: r for r in records})
    persist_snapshot(orchestrator.results(), roots)

    if any(not o.success for o in outcomes):
        raise typer.Exit(code=1)
