"""Config commands.

Show the effective configuration or write a default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from reclaim.core.config import ReclaimConfig, load_config_or_default, save_config
from reclaim.core.errors import ConfigError
from reclaim.core.paths import get_config_path
from reclaim.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(title=f"Configuration ({get_config_path()})", header_style="bold_header")
    table.add_column("Setting", style="bold", no_wrap=True)
    table.add_column("Value")

    roots = ", ".join(str(r) for r in config.resolved_roots())
    if not config.default_roots:
        roots = f"{roots} [dim](built-in)[/dim]"
    table.add_row("default_roots", roots)
    table.add_row("hash_workers", str(config.hash_workers))
    table.add_row("wipe_limit_bytes", str(config.wipe_limit_bytes))
    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        return

    try:
        saved = save_config(ReclaimConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
