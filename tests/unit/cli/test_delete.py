"""Unit tests for the delete command."""

from pathlib import Path

import pytest
from reclaim.cli.main import app
from reclaim.core.snapshot import load_snapshot
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def scanned(sample_tree: Path) -> Path:
    """Sample tree with a saved last scan."""
    result = runner.invoke(app, ["-q", "scan", "-p", str(sample_tree)])
    assert result.exit_code == 0, result.output
    return sample_tree


class TestDeleteCommand:
    """Tests for reclaim delete."""

    def test_no_snapshot(self) -> None:
        """Deleting before any scan is an error."""
        result = runner.invoke(app, ["delete", "--id", "d1", "--yes"])

        assert result.exit_code == 1
        assert "No saved scan found" in result.output

    def test_delete_by_id(self, scanned: Path) -> None:
        """A deleted record disappears from disk and the saved scan."""
        result = runner.invoke(app, ["delete", "--id", "l2", "--yes"])

        assert result.exit_code == 0, result.output
        assert "All 1 file(s) deleted." in result.output
        assert not (scanned / "c.log").exists()
        snapshot = load_snapshot()
        assert snapshot is not None
        assert [r.id for r in snapshot.records] == ["d1", "t3", "e3"]

    def test_unknown_id_warns(self, scanned: Path) -> None:
        """Unknown ids are reported and skipped."""
        result = runner.invoke(app, ["delete", "--id", "zz", "--yes"])

        assert result.exit_code == 0
        assert "Unknown record id (skipped): zz" in result.output
        assert len(list(scanned.iterdir())) == 4

    def test_nothing_requested(self, scanned: Path) -> None:
        """Without ids or --selected nothing happens."""
        result = runner.invoke(app, ["delete"])

        assert result.exit_code == 0
        assert "Nothing to delete" in result.output

    def test_declined_confirmation(self, scanned: Path) -> None:
        """Answering no leaves the file in place."""
        result = runner.invoke(app, ["delete", "--id", "d1"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted." in result.output
        assert (scanned / "b.bin").exists()

    def test_selected_dry_run(self, scanned: Path) -> None:
        """--selected targets pre-selected records; dry-run keeps them."""
        result = runner.invoke(app, ["delete", "--selected", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dry-run: 3 file(s) would be deleted." in result.output
        assert len(list(scanned.iterdir())) == 4
        snapshot = load_snapshot()
        assert snapshot is not None
        assert len(snapshot.records) == 4

    def test_secure_delete(self, scanned: Path) -> None:
        """--secure still removes the file."""
        result = runner.invoke(app, ["delete", "--id", "d1", "--secure", "--yes"])

        assert result.exit_code == 0, result.output
        assert not (scanned / "b.bin").exists()
        assert (scanned / "a.bin").exists()

    def test_failure_exit_code(self, scanned: Path) -> None:
        """A failed deletion exits non-zero and keeps the record."""
        (scanned / "c.log").unlink()

        result = runner.invoke(app, ["delete", "--id", "l2", "--yes"])

        assert result.exit_code == 1
        assert "0 succeeded, 1 failed" in result.output
        snapshot = load_snapshot()
        assert snapshot is not None
        assert "l2" in [r.id for r in snapshot.records]

    def test_double_delete(self, scanned: Path) -> None:
        """The second delete of the same id is an unknown id."""
        runner.invoke(app, ["delete", "--id", "t3", "--yes"])

        result = runner.invoke(app, ["delete", "--id", "t3", "--yes"])

        assert result.exit_code == 0
        assert "Unknown record id (skipped): t3" in result.output

    def test_file_in_two_categories(self, scan_root: Path) -> None:
        """Deleting one id of a file flagged twice drops both from the saved scan."""
        (scan_root / "crash.tmp").write_bytes(b"dump")
        runner.invoke(app, ["-q", "scan", "-p", str(scan_root)])

        result = runner.invoke(app, ["delete", "--selected", "--yes"])

        assert result.exit_code == 0, result.output
        assert "All 1 file(s) deleted." in result.output
        snapshot = load_snapshot()
        assert snapshot is not None
        assert snapshot.records == []

        again = runner.invoke(app, ["delete", "--id", "t0", "--yes"])
        assert "Unknown record id (skipped): t0" in again.output
