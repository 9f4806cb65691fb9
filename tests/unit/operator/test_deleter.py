"""Unit tests for DeletionEngine and wipe_prefix."""

import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from reclaim.core.store import ResultStore
from reclaim.models.record import Category, FileRecord
from reclaim.operator.deleter import DeletionEngine, wipe_prefix


def _store_for(*paths: Path) -> ResultStore:
    return ResultStore(
        FileRecord.create(Category.TEMP, i, str(p), 0.0, "Temp / Cache file")
        for i, p in enumerate(paths)
    )


class TestWipePrefix:
    """Tests for the partial overwrite."""

    def test_large_file_first_mib_only(self, tmp_path: Path) -> None:
        """Only the first MiB is zeroed; the rest and the size are unchanged."""
        target = tmp_path / "big.bin"
        target.write_bytes(b"\xff" * (2 * 1048576))

        written = wipe_prefix(str(target))

        data = target.read_bytes()
        assert written == 1048576
        assert len(data) == 2 * 1048576
        assert data[:1048576] == bytes(1048576)
        assert data[1048576:] == b"\xff" * 1048576

    def test_small_file_fully_zeroed(self, tmp_path: Path) -> None:
        """Files below the limit are zeroed over their whole length."""
        target = tmp_path / "small.txt"
        target.write_bytes(b"secret")

        assert wipe_prefix(str(target)) == 6
        assert target.read_bytes() == bytes(6)

    def test_custom_limit(self, tmp_path: Path) -> None:
        """The overwrite length follows the limit argument."""
        target = tmp_path / "f.bin"
        target.write_bytes(b"abcdef")

        assert wipe_prefix(str(target), limit=2) == 2
        assert target.read_bytes() == b"\x00\x00cdef"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises OSError."""
        with pytest.raises(OSError):
            wipe_prefix(str(tmp_path / "gone"))


class TestDeletionEngine:
    """Tests for DeletionEngine.delete."""

    def test_deletes_and_prunes(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        """A successful delete removes the file and the record."""
        target = make_file(tmp_path / "a.tmp", b"x")
        store = _store_for(target)

        outcomes = DeletionEngine(store).delete(["t0"])

        assert [o.to_dict() for o in outcomes] == [{"id": "t0", "success": True}]
        assert not target.exists()
        assert len(store) == 0

    def test_unknown_ids_skipped(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        """Ids that are not in the store produce no outcome."""
        target = make_file(tmp_path / "a.tmp", b"x")

        outcomes = DeletionEngine(_store_for(target)).delete(["zz", "t0", "t9"])

        assert [o.id for o in outcomes] == ["t0"]

    def test_failure_keeps_record(self, tmp_path: Path) -> None:
        """A failed unlink reports the error and keeps the record."""
        store = _store_for(tmp_path / "already-gone.tmp")

        outcomes = DeletionEngine(store).delete(["t0"])

        assert outcomes[0].success is False
        assert outcomes[0].error
        assert "t0" in store

    def test_failure_does_not_stop_batch(
        self, tmp_path: Path, make_file: Callable[..., Path]
    ) -> None:
        """Later ids are processed after an earlier failure."""
        keep = make_file(tmp_path / "b.tmp", b"x")
        store = _store_for(tmp_path / "missing.tmp", keep)

        outcomes = DeletionEngine(store).delete(["t0", "t1"])

        assert [(o.id, o.success) for o in outcomes] == [("t0", False), ("t1", True)]

    def test_secure_wipes_before_unlink(
        self, tmp_path: Path, make_file: Callable[..., Path]
    ) -> None:
        """Secure deletion wipes with the configured limit, then unlinks."""
        target = make_file(tmp_path / "a.tmp", b"data")

        with patch("reclaim.operator.deleter.wipe_prefix", return_value=4) as mock_wipe:
            engine = DeletionEngine(_store_for(target), wipe_limit_bytes=512)
            outcomes = engine.delete(["t0"], secure=True)

        mock_wipe.assert_called_once_with(str(target), 512)
        assert outcomes[0].success is True
        assert not target.exists()

    def test_secure_wipe_failure_reported(
        self, tmp_path: Path, make_file: Callable[..., Path]
    ) -> None:
        """A failed wipe is a failed delete and the file stays."""
        target = make_file(tmp_path / "a.tmp", b"data")

        with patch("reclaim.operator.deleter.wipe_prefix", side_effect=PermissionError("denied")):
            outcomes = DeletionEngine(_store_for(target)).delete(["t0"], secure=True)

        assert outcomes[0].success is False
        assert outcomes[0].error == "denied"
        assert target.exists()

    def test_dry_run(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        """Dry-run reports success and changes nothing."""
        target = make_file(tmp_path / "a.tmp", b"x")
        store = _store_for(target)

        outcomes = DeletionEngine(store, dry_run=True).delete(["t0"], secure=True)

        assert outcomes[0].to_dict() == {"id": "t0", "success": True, "dry_run": True}
        assert target.exists()
        assert "t0" in store


class TestSharedPath:
    """Tests for files flagged under more than one category."""

    def _two_records(self, path: Path) -> ResultStore:
        return ResultStore(
            [
                FileRecord.create(Category.LOG, 0, str(path), 0.0, "Log file (0 days old)"),
                FileRecord.create(Category.TEMP, 0, str(path), 0.0, "Temp / Cache file"),
            ]
        )

    def test_unlinked_once(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        """Both ids succeed and the file is removed a single time."""
        target = make_file(tmp_path / "crash.tmp", b"dump")
        store = self._two_records(target)

        with patch("reclaim.operator.deleter.os.unlink", wraps=os.unlink) as mock_unlink:
            outcomes = DeletionEngine(store).delete(["l0", "t0"])

        assert [(o.id, o.success) for o in outcomes] == [("l0", True), ("t0", True)]
        mock_unlink.assert_called_once_with(str(target))
        assert not target.exists()
        assert len(store) == 0

    def test_sibling_records_pruned(self, tmp_path: Path, make_file: Callable[..., Path]) -> None:
        """Deleting one id also drops the other records of that file."""
        target = make_file(tmp_path / "crash.tmp", b"dump")
        store = self._two_records(target)

        outcomes = DeletionEngine(store).delete(["t0"])

        assert [o.id for o in outcomes] == ["t0"]
        assert store.records() == []

    def test_dry_run_reports_each_id(
        self, tmp_path: Path, make_file: Callable[..., Path]
    ) -> None:
        """Dry-run gives a dry-run outcome for every id and keeps the records."""
        target = make_file(tmp_path / "crash.tmp", b"dump")
        store = self._two_records(target)

        outcomes = DeletionEngine(store, dry_run=True).delete(["l0", "t0"])

        assert all(o.success and o.dry_run for o in outcomes)
        assert len(store) == 2
