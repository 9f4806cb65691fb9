"""Deletion engine for scan results.

Handles removal of selected records with optional partial secure wipe
and dry-run support. Failures are isolated per record and reported with
the underlying OS error message.
"""

import logging
import os

from reclaim.core.config import DEFAULT_WIPE_LIMIT_BYTES
from reclaim.core.store import ResultStore
from reclaim.models.record import DeleteOutcome, FileRecord

logger = logging.getLogger(__name__)

_WIPE_CHUNK = 64 * 1024


def wipe_prefix(path: str, limit: int = DEFAULT_WIPE_LIMIT_BYTES) -> int:
    """Overwrite the start of a file with zero bytes in place.

    At most ``min(file size, limit)`` bytes are written, in fixed-size
    chunks, and flushed to disk. Files larger than ``limit`` keep the
    rest of their content, so this is a partial wipe only.

    Args:
        path: File to overwrite.
        limit: Maximum number of bytes to overwrite.

    Returns:
        Number of bytes overwritten.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    length = min(os.stat(path).st_size, limit)
    zeros = bytes(min(length, _WIPE_CHUNK))
    written = 0
    with open(path, "r+b") as f:
        while written < length:
            n = f.write(zeros[: length - written])
            written += n
        f.flush()
        os.fsync(f.fileno())
    return written


class DeletionEngine:
    """Deletes files behind scan records and prunes them from the store.

    Attributes:
        _store: Records of the most recent scan.
        _dry_run: If True, report what would be deleted without deleting.
        _wipe_limit: Bytes zeroed before unlinking on a secure delete.
    """

    def __init__(
        self,
        store: ResultStore,
        *,
        dry_run: bool = False,
        wipe_limit_bytes: int = DEFAULT_WIPE_LIMIT_BYTES,
    ) -> None:
        """Initialize the DeletionEngine.

        Args:
            store: Result store to resolve ids against and prune.
            dry_run: If True, nothing is removed from disk or the store.
            wipe_limit_bytes: Overwrite length for secure deletes.
        """
        self._store = store
        self._dry_run = dry_run
        self._wipe_limit = wipe_limit_bytes

    def delete(self, ids: list[str], secure: bool = False) -> list[DeleteOutcome]:
        """Delete the files behind ``ids`` and return per-id outcomes.

        Ids that are not in the store are skipped and get no outcome.
        Each id is processed independently; a failure never stops the
        rest of the batch. A file flagged under several categories is
        removed once: its other ids in the batch succeed without touching
        the disk again, and all of its records leave the store.

        Args:
            ids: Record ids to delete.
            secure: Zero the start of each file before unlinking it.

        Returns:
            List of DeleteOutcome, one per known id, in input order.
        """
        records: list[FileRecord] = []
        for record_id in ids:
            record = self._store.get(record_id)
            if record is None:
                logger.debug("Skipping unknown record id: %s", record_id)
                continue
            records.append(record)

        outcomes: list[DeleteOutcome] = []
        handled: set[str] = set()

        for record in records:
            if record.path in handled:
                logger.debug("Already handled %s (id %s)", record.path, record.id)
                outcomes.append(DeleteOutcome(id=record.id, success=True, dry_run=self._dry_run))
                continue
            outcome = self._delete_single(record, secure)
            if outcome.success:
                handled.add(record.path)
            outcomes.append(outcome)

        return outcomes

    def _delete_single(self, record: FileRecord, secure: bool) -> DeleteOutcome:
        """Delete a single record's file.

        Args:
            record: Record to delete.
            secure: Whether to wipe before unlinking.

        Returns:
            DeleteOutcome indicating success or failure.
        """
        if self._dry_run:
            logger.info("Dry-run: would delete %s", record.path)
            return DeleteOutcome(id=record.id, success=True, dry_run=True)

        try:
            if secure:
                wiped = wipe_prefix(record.path, self._wipe_limit)
                logger.debug("Wiped %d bytes of %s", wiped, record.path)
            os.unlink(record.path)
        except OSError as e:
            logger.warning("Failed to delete %s: %s", record.path, e)
            return DeleteOutcome(id=record.id, success=False, error=str(e))

        removed = self._store.remove_path(record.path)
        logger.info("Deleted %s (%s)", record.path, ", ".join(removed))
        return DeleteOutcome(id=record.id, success=True)
