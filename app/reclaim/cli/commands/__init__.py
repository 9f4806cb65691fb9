"""CLI commands for reclaim.

This package contains all subcommand implementations.
"""

from reclaim.cli.commands import clean, config, delete, scan

__all__ = ["clean", "config", "delete", "scan"]
