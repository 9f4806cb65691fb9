"""Unit tests for console formatting helpers."""

import pytest
from reclaim.models.record import Category, DeleteOutcome, FileRecord
from reclaim.utils.formatting import create_outcome_table, format_record_row, format_size_mb


class TestFormatSizeMb:
    """Tests for format_size_mb."""

    @pytest.mark.parametrize(
        ("size_mb", "expected"),
        [
            (0.0, "0 B"),
            (500 / 1048576, "500 B"),
            (2048 / 1048576, "2.0 KB"),
            (12.0, "12.0 MB"),
            (1536.0, "1.50 GB"),
        ],
    )
    def test_units(self, size_mb: float, expected: str) -> None:
        """Sizes pick the largest sensible unit."""
        assert format_size_mb(size_mb) == expected


class TestFormatRecordRow:
    """Tests for format_record_row."""

    def test_selected_marker(self) -> None:
        """Selected records get a filled marker in the category color."""
        record = FileRecord.create(Category.LOG, 2, "/var/app.log", 1.0, "Log file (3 days old)")

        marker, record_id, category, path, size, reason = format_record_row(record)

        assert marker == "[category.log]●[/]"
        assert record_id == "l2"
        assert category == "[category.log]log[/]"
        assert path == "/var/app.log"
        assert size == "1.0 MB"
        assert reason == "Log file (3 days old)"

    def test_unselected_marker(self) -> None:
        """Empty files are shown unselected."""
        record = FileRecord.create(Category.EMPTY, 0, "/x/blank", 0.0, "Empty file")
        assert format_record_row(record)[0] == "[category.empty]○[/]"


class TestOutcomeTable:
    """Tests for create_outcome_table."""

    def test_one_row_per_outcome(self) -> None:
        """Every outcome becomes a row, unknown paths shown as '-'."""
        record = FileRecord.create(Category.TEMP, 1, "/x/a.tmp", 0.0, "Temp / Cache file")
        outcomes = [
            DeleteOutcome(id="t1", success=True),
            DeleteOutcome(id="zz", success=False, error="No such file"),
        ]

        table = create_outcome_table(outcomes, {"t1": record})

        assert table.row_count == 2
