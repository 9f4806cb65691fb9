"""Allow running as ``python -m reclaim``."""

from reclaim.cli.main import app

app()
