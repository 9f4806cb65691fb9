"""Unit tests for last-scan snapshot persistence."""

import json
from pathlib import Path

import pytest
from reclaim import __version__
from reclaim.core.errors import SnapshotError
from reclaim.core.paths import get_last_scan_path
from reclaim.core.snapshot import ScanSnapshot, load_snapshot, save_snapshot
from reclaim.models.record import Category, FileRecord


@pytest.fixture
def records() -> list[FileRecord]:
    return [
        FileRecord.create(Category.DUPLICATE, 1, "/data/b.bin", 0.5, "Duplicate of: a.bin"),
        FileRecord.create(Category.EMPTY, 3, "/data/d.tmp", 0.0, "Empty file"),
    ]


class TestScanSnapshot:
    """Tests for the ScanSnapshot model."""

    def test_create_metadata(self, records: list[FileRecord]) -> None:
        """create() fills in version and roots."""
        snapshot = ScanSnapshot.create(records, [Path("/data")])

        assert snapshot.version == __version__
        assert snapshot.roots == ("/data",)
        assert snapshot.hostname
        assert snapshot.records == records

    def test_with_records_keeps_metadata(self, records: list[FileRecord]) -> None:
        """with_records() swaps records only."""
        snapshot = ScanSnapshot.create(records, [Path("/data")])

        trimmed = snapshot.with_records(records[1:])

        assert trimmed.timestamp == snapshot.timestamp
        assert trimmed.records == records[1:]

    def test_to_store(self, records: list[FileRecord]) -> None:
        """to_store() loads every record by id."""
        store = ScanSnapshot.create(records, []).to_store()
        assert [r.id for r in store.records()] == ["d1", "e3"]

    def test_dict_shape(self, records: list[FileRecord]) -> None:
        """to_dict() nests metadata and records."""
        data = ScanSnapshot.create(records, [Path("/data")]).to_dict()

        assert set(data) == {"metadata", "records"}
        assert data["metadata"]["roots"] == ["/data"]
        assert data["records"][0]["id"] == "d1"


class TestPersistence:
    """Tests for save_snapshot and load_snapshot."""

    def test_load_without_save(self) -> None:
        """No snapshot on disk yields None."""
        assert load_snapshot() is None

    def test_save_and_load_default_path(self, records: list[FileRecord]) -> None:
        """Snapshots go to the XDG state directory and load back equal."""
        snapshot = ScanSnapshot.create(records, [Path("/data")])

        saved = save_snapshot(snapshot)

        assert saved == get_last_scan_path()
        assert load_snapshot() == snapshot

    def test_corrupt_json(self, tmp_path: Path) -> None:
        """Unparseable content raises SnapshotError."""
        path = tmp_path / "last-scan.json"
        path.write_text("{not json")

        with pytest.raises(SnapshotError, match="Corrupt"):
            load_snapshot(path)

    def test_invalid_record(self, tmp_path: Path, records: list[FileRecord]) -> None:
        """Records with invalid values raise SnapshotError."""
        data = ScanSnapshot.create(records, []).to_dict()
        data["records"][0]["category"] = "bogus"
        path = tmp_path / "last-scan.json"
        path.write_text(json.dumps(data))

        with pytest.raises(SnapshotError):
            load_snapshot(path)

    def test_save_failure(self, tmp_path: Path, records: list[FileRecord]) -> None:
        """An unwritable target raises SnapshotError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not dir")

        with pytest.raises(SnapshotError):
            save_snapshot(ScanSnapshot.create(records, []), blocker / "last-scan.json")
