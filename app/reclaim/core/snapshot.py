"""Last-scan snapshot persistence.

A CLI process exits after scanning, so the records of the most recent
scan are saved to ~/.local/state/reclaim/last-scan.json and reloaded by
later commands that delete by record id.
"""

import json
import logging
import os
import socket
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from reclaim.core.errors import SnapshotError
from reclaim.core.paths import ensure_state_dir, get_last_scan_path, get_state_dir
from reclaim.core.store import ResultStore
from reclaim.models.record import FileRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanSnapshot:
    """Saved result of a scan.

    Attributes:
        timestamp: ISO format timestamp when the scan was performed.
        hostname: Name of the machine that was scanned.
        version: Version of reclaim that performed the scan.
        roots: Root directories that were walked.
        records: Records remaining from the scan.
    """

    timestamp: str
    hostname: str
    version: str
    roots: tuple[str, ...]
    records: list[FileRecord] = field(default_factory=lambda: [])

    @classmethod
    def create(cls, records: list[FileRecord], roots: list[Path]) -> "ScanSnapshot":
        """Create a snapshot with auto-generated metadata."""
        from reclaim import __version__

        return cls(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            version=__version__,
            roots=tuple(str(r) for r in roots),
            records=records,
        )

    def with_records(self, records: list[FileRecord]) -> "ScanSnapshot":
        """Copy of this snapshot holding ``records`` instead."""
        return ScanSnapshot(
            timestamp=self.timestamp,
            hostname=self.hostname,
            version=self.version,
            roots=self.roots,
            records=records,
        )

    def to_store(self) -> ResultStore:
        """Load the records into a fresh ResultStore."""
        return ResultStore(self.records)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": {
                "timestamp": self.timestamp,
                "hostname": self.hostname,
                "version": self.version,
                "roots": list(self.roots),
            },
            "records": [r.to_dict() for r in self.records],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanSnapshot":
        """Create a ScanSnapshot from a dictionary.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has an invalid value.
        """
        meta = data["metadata"]
        return cls(
            timestamp=meta["timestamp"],
            hostname=meta["hostname"],
            version=meta["version"],
            roots=tuple(meta.get("roots", [])),
            records=[FileRecord.from_dict(r) for r in data["records"]],
        )


def save_snapshot(snapshot: ScanSnapshot, path: Path | None = None) -> Path:
    """Write a snapshot to disk, replacing any previous one.

    Args:
        snapshot: Snapshot to save.
        path: Target file. If None, uses the default last-scan path.

    Returns:
        Path where the snapshot was saved.

    Raises:
        SnapshotError: If the state directory or file cannot be written.
    """
    target = path or get_last_scan_path()

    tmp_path: Path | None = None
    try:
        if target.parent == get_state_dir():
            ensure_state_dir()
        else:
            target.parent.mkdir(parents=True, exist_ok=True)

        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=target.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            json.dump(snapshot.to_dict(), f, indent=2)
        os.replace(str(tmp_path), str(target))
    except (OSError, RuntimeError) as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SnapshotError(f"Failed to save scan snapshot: {e}") from e

    return target


def load_snapshot(path: Path | None = None) -> ScanSnapshot | None:
    """Read the last snapshot from disk.

    Args:
        path: Snapshot file. If None, uses the default last-scan path.

    Returns:
        ScanSnapshot, or None if no scan has been saved yet.

    Raises:
        SnapshotError: If the file exists but cannot be read or parsed.
    """
    source = path or get_last_scan_path()
    if not source.exists():
        return None

    try:
        data = json.loads(source.read_text(encoding="utf-8"))
        return ScanSnapshot.from_dict(data)
    except OSError as e:
        raise SnapshotError(f"Failed to read scan snapshot: {e}") from e
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Corrupt scan snapshot %s: %s", source, e)
        raise SnapshotError(f"Corrupt scan snapshot {source}: {e}") from e
