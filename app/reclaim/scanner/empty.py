"""Empty file classification."""

import logging
import os

from reclaim.models.record import Category, FileRecord
from reclaim.scanner.base import FileClassifier

logger = logging.getLogger(__name__)


class EmptyClassifier(FileClassifier):
    """Flags zero-byte files.

    The size is re-read at classification time. Empty records are not
    pre-selected for deletion.
    """

    @property
    def category(self) -> Category:
        """Return Category.EMPTY."""
        return Category.EMPTY

    def progress_message(self, path: str) -> str:
        """Static message for the empty pass."""
        return "Scanning empty files..."

    def check(self, index: int, path: str) -> FileRecord | None:
        """Flag ``path`` if it is exactly 0 bytes."""
        try:
            size = os.stat(path).st_size
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            return None
        if size != 0:
            return None
        return FileRecord.create(Category.EMPTY, index, path, 0.0, "Empty file")
