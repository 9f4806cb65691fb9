"""Deletion of scan results.

This module exports the deletion engine and the partial wipe helper.
"""

from reclaim.operator.deleter import DeletionEngine, wipe_prefix

__all__ = ["DeletionEngine", "wipe_prefix"]
