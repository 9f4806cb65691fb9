"""XDG-compliant path management for reclaim.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage, plus the built-in
default scan roots.

XDG defaults:
- Config: ~/.config/reclaim/
- State: ~/.local/state/reclaim/
"""

import os
import tempfile
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "reclaim"

# Scan roots used when neither the caller nor the config names any
# (relative to user home)
_DEFAULT_HOME_ROOTS: tuple[str, ...] = (
    "Downloads",
    "Documents",
    "Desktop",
    "Pictures",
    ".npm",
)


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/reclaim/ (or XDG_CONFIG_HOME/reclaim/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    Returns:
        Path to ~/.local/state/reclaim/ (or XDG_STATE_HOME/reclaim/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the config file path.

    Returns:
        Path to ~/.config/reclaim/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_last_scan_path() -> Path:
    """Get the last scan snapshot file path.

    Returns:
        Path to ~/.local/state/reclaim/last-scan.json.
    """
    return get_state_dir() / "last-scan.json"


def get_default_roots() -> list[Path]:
    """Get the built-in default scan roots.

    Includes common user folders and the system temp directory.
    Existence is not checked here; the orchestrator drops missing
    roots when a scan starts.

    Returns:
        List of candidate root directories.
    """
    home = Path.home()
    roots = [home / name for name in _DEFAULT_HOME_ROOTS]
    roots.append(Path(tempfile.gettempdir()))
    return roots


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Returns:
        Path to the state directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_state_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create state directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create state directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
