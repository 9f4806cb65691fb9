"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
import shutil
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from reclaim.scanner.temp import is_temp_path


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories into the test's tmp dir."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg / "state"))
    return xdg


@pytest.fixture
def scan_root(tmp_path: Path) -> Iterator[Path]:
    """Empty directory to scan, outside any temp/cache-looking path.

    Falls back to a directory beside the tests when the tmp dir itself
    would match a temp marker (e.g. ...\\AppData\\Local\\Temp).
    """
    root = tmp_path / "root"
    if not is_temp_path(str(root / "sample.txt")):
        root.mkdir()
        yield root
        return

    root = Path(tempfile.mkdtemp(prefix="reclaim-root-", dir=Path(__file__).parent))
    try:
        yield root
    finally:
        shutil.rmtree(root, ignore_errors=True)


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory writing a file (and parent dirs) with bytes content."""

    def _make(path: Path, content: bytes = b"", mtime: float | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def sample_tree(scan_root: Path, make_file: Callable[..., Path]) -> Path:
    """Root holding a.bin and b.bin (same 500 bytes), c.log and an empty d.tmp."""
    make_file(scan_root / "a.bin", b"X" * 500)
    make_file(scan_root / "b.bin", b"X" * 500)
    make_file(scan_root / "c.log", b"started\nstopped\n")
    make_file(scan_root / "d.tmp")
    return scan_root
