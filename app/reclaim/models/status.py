"""Scan status and option models.

ScanStatus is the only externally observable progress signal of a
scan. It is replaced wholesale, never appended to.
"""

from dataclasses import dataclass, replace
from typing import Any

from reclaim.models.record import Category


@dataclass(frozen=True, slots=True)
class ScanStatus:
    """Snapshot of the current (or last) scan.

    ``progress`` is the index within the classification pass that is
    currently running and resets at the start of every pass.
    ``overall_progress`` counts files across all enabled passes and
    only ever increases during a scan.

    Attributes:
        running: Whether a scan is in progress.
        progress: Index within the current pass.
        total: Number of files collected by the walk.
        current: Human-readable description of the current step.
        overall_progress: Files processed across all passes so far.
        overall_total: total multiplied by the number of enabled passes.
        cancelled: Whether the last scan was stopped by cancel().
    """

    running: bool = False
    progress: int = 0
    total: int = 0
    current: str = ""
    overall_progress: int = 0
    overall_total: int = 0
    cancelled: bool = False

    @classmethod
    def started(cls) -> "ScanStatus":
        """Fresh status for a scan that has just begun."""
        return cls(running=True, current="Collecting files...")

    def evolve(self, **changes: Any) -> "ScanStatus":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def fraction(self) -> float:
        """Overall completion between 0.0 and 1.0."""
        if self.overall_total <= 0:
            return 0.0
        return min(1.0, self.overall_progress / self.overall_total)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "running": self.running,
            "progress": self.progress,
            "total": self.total,
            "current": self.current,
            "overall_progress": self.overall_progress,
            "overall_total": self.overall_total,
            "cancelled": self.cancelled,
        }


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Which categories to scan for, and an optional root override.

    Attributes:
        duplicates: Run the duplicate detection pass.
        logs: Run the log file pass.
        temp: Run the temp/cache pass.
        empty: Run the empty file pass.
        path: If set, scan only this root instead of the defaults.
    """

    duplicates: bool = True
    logs: bool = True
    temp: bool = True
    empty: bool = True
    path: str | None = None

    def enabled_categories(self) -> list[Category]:
        """Enabled categories in pass order (duplicate, log, temp, empty)."""
        flags = (
            (Category.DUPLICATE, self.duplicates),
            (Category.LOG, self.logs),
            (Category.TEMP, self.temp),
            (Category.EMPTY, self.empty),
        )
        return [category for category, enabled in flags if enabled]
