"""Content-addressed duplicate detection.

Files are keyed by (MD5 digest, size in millibytes of a megabyte). The
first file seen with a key is canonical; every later file with the same
key is flagged as a duplicate of it.

Hashing runs on a bounded thread pool, but results are consumed in
discovery order, so the canonical file of a group is always the one
with the lowest walk index regardless of which hash finishes first.
"""

import hashlib
import logging
import math
import os
from collections.abc import Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from reclaim.models.record import BYTES_PER_MB, Category, FileRecord
from reclaim.scanner.base import Classifier, ProgressCallback

logger = logging.getLogger(__name__)

# Files larger than this (in MB) are not hashed
MAX_HASH_SIZE_MB = 500

_HASH_BUFFER = 1024 * 1024


def hash_file(path: str, buffer_size: int = _HASH_BUFFER) -> str | None:
    """Compute the MD5 hex digest of a file's full content.

    Args:
        path: File to hash.
        buffer_size: Bytes read per chunk.

    Returns:
        Hex digest, or None if the file cannot be read.
    """
    h = hashlib.md5(usedforsecurity=False)
    try:
        with open(path, "rb") as f:
            while chunk := f.read(buffer_size):
                h.update(chunk)
    except OSError as e:
        logger.debug("Cannot hash %s: %s", path, e)
        return None
    return h.hexdigest()


def size_key(size_mb: float) -> int:
    """Quantize a size in MB to thousandths, rounding halves up."""
    return math.floor(size_mb * 1000 + 0.5)


def _fingerprint(path: str) -> tuple[float, str | None]:
    """Stat and hash a file for duplicate keying.

    Returns:
        Tuple of (size in MB, digest). The digest is None when the file
        is outside the hashing bounds or unreadable.
    """
    try:
        size_mb = os.stat(path).st_size / BYTES_PER_MB
    except OSError:
        return 0.0, None
    if size_mb == 0 or size_mb > MAX_HASH_SIZE_MB:
        return size_mb, None
    return size_mb, hash_file(path)


class DuplicateDetector(Classifier):
    """Flags files whose content and size match an earlier file.

    Args:
        workers: Number of hashing threads.
    """

    def __init__(self, workers: int = 4) -> None:
        if workers < 1:
            msg = f"Worker count must be at least 1, got {workers}"
            raise ValueError(msg)
        self._workers = workers

    @property
    def category(self) -> Category:
        """Return Category.DUPLICATE."""
        return Category.DUPLICATE

    def progress_message(self, path: str) -> str:
        """Status message naming the file being compared."""
        return f"Scanning duplicates: {Path(path).name}"

    def classify(
        self,
        files: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> Iterator[FileRecord]:
        """Yield a Duplicate record for every non-canonical file.

        Args:
            files: Complete file list of the scan, in walk order.
            on_progress: Optional callback invoked as each file is folded.

        Yields:
            FileRecord for each duplicate, in walk order.
        """
        canonical: dict[tuple[str, int], str] = {}

        executor = ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="reclaim-hash")
        try:
            futures: list[Future[tuple[float, str | None]]] = [
                executor.submit(_fingerprint, path) for path in files
            ]
            for index, (path, future) in enumerate(zip(files, futures, strict=True)):
                if on_progress is not None:
                    on_progress(index, path)

                size_mb, digest = future.result()
                if digest is None:
                    continue

                key = (digest, size_key(size_mb))
                original = canonical.get(key)
                if original is None:
                    canonical[key] = path
                    continue

                yield FileRecord.create(
                    Category.DUPLICATE,
                    index,
                    path,
                    size_mb,
                    f"Duplicate of: {Path(original).name}",
                )
        finally:
            # Early exit (cancel) drops hashes that have not started yet
            executor.shutdown(wait=True, cancel_futures=True)
