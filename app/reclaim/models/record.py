"""File record models for scan results.

This module defines the data structures produced by classifiers
during a scan and consumed by the deletion engine.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

# Bytes per megabyte used for all size_mb values
BYTES_PER_MB = 1048576


class Category(str, Enum):
    """Category of a reclaimable file.

    Attributes:
        DUPLICATE: Same content and size as a file seen earlier in the walk.
        LOG: File name matches a log, crash or debug dump pattern.
        TEMP: Temp extension, OS metadata file, or located in a cache directory.
        EMPTY: Zero-byte file.
    """

    DUPLICATE = "duplicate"
    LOG = "log"
    TEMP = "temp"
    EMPTY = "empty"

    @property
    def tag(self) -> str:
        """Single-letter prefix used to build record ids."""
        return self.value[0]

    @property
    def selected_by_default(self) -> bool:
        """Whether records of this category are pre-selected for deletion."""
        return self is not Category.EMPTY


@dataclass(frozen=True, slots=True)
class FileRecord:
    """A file flagged by a classifier during a scan.

    Attributes:
        id: Identifier unique within a scan run (category tag + discovery index).
        category: Classifier that flagged the file.
        path: Absolute path of the file.
        name: Base name of the file.
        directory: Parent directory of the file.
        size_mb: Size in megabytes.
        reason: Human-readable explanation.
        selected: Whether the record is pre-selected for deletion.
    """

    id: str
    category: Category
    path: str
    name: str
    directory: str
    size_mb: float
    reason: str
    selected: bool

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id:
            msg = "Record id cannot be empty"
            raise ValueError(msg)
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_mb < 0:
            msg = f"Size cannot be negative, got {self.size_mb}"
            raise ValueError(msg)

    @classmethod
    def create(
        cls,
        category: Category,
        index: int,
        path: str,
        size_mb: float,
        reason: str,
    ) -> "FileRecord":
        """Build a record for the file at ``path`` discovered at ``index``.

        Args:
            category: Category the file was classified as.
            index: Position of the file in walk order.
            path: Absolute path of the file.
            size_mb: Size in megabytes.
            reason: Human-readable explanation.

        Returns:
            FileRecord with id, display name, directory and default
            selection derived from the inputs.
        """
        p = Path(path)
        return cls(
            id=f"{category.tag}{index}",
            category=category,
            path=path,
            name=p.name,
            directory=str(p.parent),
            size_mb=size_mb,
            reason=reason,
            selected=category.selected_by_default,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "category": self.category.value,
            "path": self.path,
            "name": self.name,
            "directory": self.directory,
            "size_mb": self.size_mb,
            "reason": self.reason,
            "selected": self.selected,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileRecord":
        """Create a FileRecord from a dictionary.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has an invalid value.
        """
        return cls(
            id=data["id"],
            category=Category(data["category"]),
            path=data["path"],
            name=data["name"],
            directory=data["directory"],
            size_mb=float(data["size_mb"]),
            reason=data["reason"],
            selected=bool(data["selected"]),
        )


@dataclass(frozen=True, slots=True)
class DeleteOutcome:
    """Result of deleting a single record.

    Attributes:
        id: Record id that was operated on.
        success: Whether the file was removed.
        error: Underlying error message if the deletion failed.
        dry_run: Whether this was a dry-run (nothing removed).
    """

    id: str
    success: bool
    error: str | None = None
    dry_run: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"id": self.id, "success": self.success}
        if self.error is not None:
            data["error"] = self.error
        if self.dry_run:
            data["dry_run"] = True
        return data
