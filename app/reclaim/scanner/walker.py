"""Bounded recursive enumeration of regular files.

The walker yields every regular file under a root, down to a fixed
depth, skipping well-known system directories. Directories that cannot
be listed contribute nothing; the walk carries on elsewhere.
"""

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

# Roots are depth 0; directories deeper than this are not listed
MAX_DEPTH = 6

# Directory base names (lower-case) that are never descended into
SKIP_DIRS: frozenset[str] = frozenset(
    {
        "windows",
        "system32",
        "syswow64",
        "program files",
        "program files (x86)",
        "$recycle.bin",
        "boot",
        "recovery",
        "system volume information",
        "lost+found",
    }
)


def is_skipped_dir(name: str) -> bool:
    """Check if a directory name is on the skip list (case-insensitive)."""
    return name.lower() in SKIP_DIRS


class DirectoryWalker:
    """Enumerates regular files below one or more roots.

    Traversal is depth-first using an explicit stack of directory
    iterators, so host recursion limits never apply. Entries are
    visited in name order and files are yielded in the order they are
    reached, which makes the output order stable across runs.

    Symbolic links are neither followed nor reported.

    Args:
        max_depth: Deepest directory level that is listed.
        should_stop: Optional callable polled between entries; when it
            returns True the walk ends early.
    """

    def __init__(
        self,
        *,
        max_depth: int = MAX_DEPTH,
        should_stop: Callable[[], bool] | None = None,
    ) -> None:
        self._max_depth = max_depth
        self._should_stop = should_stop or (lambda: False)

    def walk(self, root: Path | str) -> Iterator[str]:
        """Yield absolute paths of regular files under ``root``.

        Args:
            root: Directory to enumerate (depth 0).

        Yields:
            Absolute file paths in depth-first visitation order.
        """
        start = os.path.abspath(root)
        entries = self._list_dir(start)
        if entries is None:
            return

        stack: list[tuple[Iterator[os.DirEntry[str]], int]] = [(iter(entries), 0)]

        while stack:
            if self._should_stop():
                return

            iterator, depth = stack[-1]
            entry = next(iterator, None)
            if entry is None:
                stack.pop()
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
            except OSError:
                logger.debug("Cannot determine type of: %s", entry.path)
                continue

            if is_dir:
                if is_skipped_dir(entry.name) or depth + 1 > self._max_depth:
                    continue
                children = self._list_dir(entry.path)
                if children:
                    stack.append((iter(children), depth + 1))
            elif is_file:
                yield entry.path

    def walk_all(self, roots: list[Path]) -> list[str]:
        """Walk several roots and concatenate their files in root order.

        Args:
            roots: Directories to enumerate.

        Returns:
            Flat list of absolute file paths.
        """
        files: list[str] = []
        for root in roots:
            files.extend(self.walk(root))
        return files

    @staticmethod
    def _list_dir(path: str) -> list[os.DirEntry[str]] | None:
        """List a directory sorted by name, or None if it cannot be read."""
        try:
            with os.scandir(path) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug("Cannot list directory %s: %s", path, e)
            return None
