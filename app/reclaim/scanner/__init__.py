"""Directory walking and file classification.

This module exports the walker and the four classifiers run by a scan.
"""

from reclaim.scanner.base import Classifier, FileClassifier
from reclaim.scanner.duplicates import DuplicateDetector
from reclaim.scanner.empty import EmptyClassifier
from reclaim.scanner.logs import LogClassifier
from reclaim.scanner.temp import TempClassifier
from reclaim.scanner.walker import SKIP_DIRS, DirectoryWalker

__all__ = [
    "SKIP_DIRS",
    "Classifier",
    "FileClassifier",
    "DirectoryWalker",
    "DuplicateDetector",
    "EmptyClassifier",
    "LogClassifier",
    "TempClassifier",
]
