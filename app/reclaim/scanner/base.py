"""Abstract base class for file classifiers.

This module defines the Classifier interface shared by all passes, the
FileClassifier base for passes that judge each file on its own (log,
temp, empty), and small stat helpers they use.
"""

import os
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence

from reclaim.models.record import BYTES_PER_MB, Category, FileRecord

# Called with (index, path) before each file of a pass is examined
ProgressCallback = Callable[[int, str], None]

_SECONDS_PER_DAY = 86400


def file_size_mb(path: str) -> float:
    """Get file size in megabytes, or 0.0 if the file cannot be stat'ed."""
    try:
        return os.stat(path).st_size / BYTES_PER_MB
    except OSError:
        return 0.0


def file_age_days(path: str, now: float | None = None) -> int:
    """Get whole days since last modification, or 0 if unavailable."""
    try:
        mtime = os.stat(path).st_mtime
    except OSError:
        return 0
    current = time.time() if now is None else now
    return int((current - mtime) // _SECONDS_PER_DAY)


class Classifier(ABC):
    """Abstract base class for all classification passes.

    A classifier sweeps the complete file list of a scan once and
    yields a FileRecord for every file it flags. Classifiers hold no
    state between scans.
    """

    @property
    @abstractmethod
    def category(self) -> Category:
        """Return the category this classifier assigns.

        Returns:
            Category enum value.
        """

    def progress_message(self, path: str) -> str:
        """Human-readable status message while examining ``path``."""
        _ = path
        return f"Scanning {self.category.value} files..."

    @abstractmethod
    def classify(
        self,
        files: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> Iterator[FileRecord]:
        """Sweep ``files`` in order and yield records for matches.

        Args:
            files: Complete file list of the scan, in walk order.
            on_progress: Optional callback invoked before each file.

        Yields:
            FileRecord for each flagged file.
        """


class FileClassifier(Classifier):
    """Classifier that decides each file on its own.

    Example:
        >>> classifier = LogClassifier()
        >>> for record in classifier.classify(["/var/tmp/app.log"]):
        ...     print(record.reason)
    """

    @abstractmethod
    def check(self, index: int, path: str) -> FileRecord | None:
        """Classify a single file.

        Args:
            index: Position of the file in walk order.
            path: Absolute path of the file.

        Returns:
            FileRecord if the file matches, None otherwise.
        """

    def classify(
        self,
        files: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> Iterator[FileRecord]:
        for index, path in enumerate(files):
            if on_progress is not None:
                on_progress(index, path)
            record = self.check(index, path)
            if record is not None:
                yield record
