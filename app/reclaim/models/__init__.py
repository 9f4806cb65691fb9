"""Data models for reclaim.

This module exports the record, outcome, status and option models.
"""

from reclaim.models.record import BYTES_PER_MB, Category, DeleteOutcome, FileRecord
from reclaim.models.status import ScanOptions, ScanStatus

__all__ = [
    "BYTES_PER_MB",
    "Category",
    "DeleteOutcome",
    "FileRecord",
    "ScanOptions",
    "ScanStatus",
]
