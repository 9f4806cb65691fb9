"""In-memory result store for the current scan.

The store holds the records of the most recent scan, in the order the
classifiers produced them. It is cleared at the start of every scan and
otherwise only shrinks, when a deletion succeeds.
"""

import threading
from collections.abc import Iterable

from reclaim.models.record import Category, FileRecord


class ResultStore:
    """Thread-safe ordered collection of FileRecords keyed by id."""

    def __init__(self, records: Iterable[FileRecord] = ()) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, FileRecord] = {}
        for record in records:
            self._records[record.id] = record

    def clear(self) -> None:
        """Remove every record."""
        with self._lock:
            self._records.clear()

    def add(self, record: FileRecord) -> None:
        """Append a record.

        Raises:
            ValueError: If a record with the same id is already stored.
        """
        with self._lock:
            if record.id in self._records:
                msg = f"Duplicate record id: {record.id}"
                raise ValueError(msg)
            self._records[record.id] = record

    def get(self, record_id: str) -> FileRecord | None:
        """Look up a record by id."""
        with self._lock:
            return self._records.get(record_id)

    def remove(self, record_id: str) -> bool:
        """Remove a record by id.

        Returns:
            True if the record was present.
        """
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def remove_path(self, path: str) -> list[str]:
        """Remove every record that refers to ``path``.

        Returns:
            Ids of the removed records, in store order.
        """
        with self._lock:
            ids = [r.id for r in self._records.values() if r.path == path]
            for record_id in ids:
                del self._records[record_id]
        return ids

    def records(self, category: Category | None = None) -> list[FileRecord]:
        """Get a copy of the stored records, optionally filtered by category."""
        with self._lock:
            values = list(self._records.values())
        if category is None:
            return values
        return [r for r in values if r.category == category]

    def reclaimable_mb(self) -> float:
        """Sum of sizes across all records, counting overlaps per record."""
        return sum(r.size_mb for r in self.records())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        with self._lock:
            return record_id in self._records
