"""Temp and cache file classification.

A file is temp/cache if its extension or name marks it as such, or if
any part of its parent directory path contains a temp or cache marker.
The directory match is a plain substring test, so a directory such as
``/home/me/templates`` also qualifies.
"""

import os

from reclaim.models.record import Category, FileRecord
from reclaim.scanner.base import FileClassifier, file_size_mb

# Lower-cased extensions of temp, backup and editor swap files
TEMP_EXTENSIONS: frozenset[str] = frozenset(
    {".tmp", ".temp", ".bak", ".old", ".cache", ".swp", ".swo"}
)

# Editor backup suffix (file.txt~)
BACKUP_SUFFIX = "~"

# OS metadata files (lower-case exact names)
TEMP_FILENAMES: frozenset[str] = frozenset(
    {"thumbs.db", "desktop.ini", ".ds_store", "ehthumbs.db"}
)

# Substrings of a lower-cased parent directory path
TEMP_DIR_MARKERS: tuple[str, ...] = (
    "/temp",
    "\\temp",
    "npm-cache",
    ".cache",
    "__pycache__",
)


def is_temp_path(path: str) -> bool:
    """Check if a file path matches any temp/cache rule."""
    directory, name = os.path.split(path)
    name = name.lower()
    ext = os.path.splitext(name)[1]

    if ext in TEMP_EXTENSIONS or name.endswith(BACKUP_SUFFIX):
        return True
    if name in TEMP_FILENAMES:
        return True

    directory = directory.lower()
    return any(marker in directory for marker in TEMP_DIR_MARKERS)


class TempClassifier(FileClassifier):
    """Flags temp files, editor leftovers, OS metadata and cache contents."""

    @property
    def category(self) -> Category:
        """Return Category.TEMP."""
        return Category.TEMP

    def progress_message(self, path: str) -> str:
        """Static message for the temp pass."""
        return "Scanning temp & cache..."

    def check(self, index: int, path: str) -> FileRecord | None:
        """Flag ``path`` if it matches a temp/cache rule."""
        if not is_temp_path(path):
            return None
        return FileRecord.create(
            Category.TEMP,
            index,
            path,
            file_size_mb(path),
            "Temp / Cache file",
        )
