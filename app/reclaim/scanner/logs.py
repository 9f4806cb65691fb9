"""Log file classification by file name pattern."""

import os
import re

from reclaim.models.record import Category, FileRecord
from reclaim.scanner.base import FileClassifier, file_age_days, file_size_mb

# Matched against the lower-cased base name
LOG_PATTERNS: tuple[re.Pattern[str], ...] = (
    # app.log, app.log.1 (numeric rotation suffix)
    re.compile(r"\.log(\.\d+)?$"),
    # Package manager failure logs
    re.compile(r"npm-debug"),
    re.compile(r"yarn-error"),
    # Crash and debug dumps
    re.compile(r"crash"),
    re.compile(r"error\.log$"),
    re.compile(r"debug\.log$"),
)


def is_log_name(name: str) -> bool:
    """Check if a base name matches any log pattern (case-insensitive)."""
    lowered = name.lower()
    return any(pattern.search(lowered) for pattern in LOG_PATTERNS)


class LogClassifier(FileClassifier):
    """Flags log, crash and debug dump files.

    The record reason carries the file age in whole days since its
    last modification.
    """

    @property
    def category(self) -> Category:
        """Return Category.LOG."""
        return Category.LOG

    def progress_message(self, path: str) -> str:
        """Static message for the log pass."""
        return "Scanning log files..."

    def check(self, index: int, path: str) -> FileRecord | None:
        """Flag ``path`` if its base name looks like a log file."""
        if not is_log_name(os.path.basename(path)):
            return None
        return FileRecord.create(
            Category.LOG,
            index,
            path,
            file_size_mb(path),
            f"Log file ({file_age_days(path)} days old)",
        )
