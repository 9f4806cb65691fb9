"""CLI package for reclaim.

This package contains the Typer application and all subcommands.
"""

from reclaim.cli.main import app

__all__ = ["app"]
