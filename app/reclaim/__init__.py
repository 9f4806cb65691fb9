"""reclaim - Find and remove reclaimable files.

Locates content duplicates, stale logs, temp/cache artifacts and empty
files, and deletes a selected subset with optional partial secure wipe.
"""

__version__ = "0.3.0"
