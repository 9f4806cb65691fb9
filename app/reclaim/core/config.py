"""Configuration model and I/O.

Configuration is stored in ~/.config/reclaim/config.toml. Every key is
optional; a missing file means all defaults.

Example config.toml:

    default_roots = ["~/Downloads", "/data/scratch"]
    hash_workers = 8
    wipe_limit_bytes = 1048576
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from reclaim.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from reclaim.core.paths import get_config_path, get_default_roots

logger = logging.getLogger(__name__)

# Bytes overwritten with zeros by a secure delete (partial wipe)
DEFAULT_WIPE_LIMIT_BYTES = 1048576


class ReclaimConfig(BaseModel):
    """User configuration for scans and deletion.

    Attributes:
        default_roots: Roots scanned when no path is given. Empty means
            the built-in defaults (Downloads, Documents, Desktop,
            Pictures, ~/.npm and the system temp directory).
        hash_workers: Threads used to hash files for duplicate detection.
        wipe_limit_bytes: Bytes zeroed at the start of a file before a
            secure delete.
    """

    model_config = ConfigDict(extra="forbid")

    default_roots: Annotated[
        list[str],
        Field(description="Scan roots used when no path is given"),
    ] = []
    hash_workers: Annotated[
        int,
        Field(ge=1, le=64, description="Hashing threads (1-64)"),
    ] = 4
    wipe_limit_bytes: Annotated[
        int,
        Field(ge=0, description="Bytes zeroed before a secure delete"),
    ] = DEFAULT_WIPE_LIMIT_BYTES

    def resolved_roots(self) -> list[Path]:
        """Get the effective default roots with ``~`` expanded."""
        if not self.default_roots:
            return get_default_roots()
        return [Path(root).expanduser() for root in self.default_roots]


def load_config(path: Path | None = None) -> ReclaimConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ReclaimConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ReclaimConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> ReclaimConfig:
    """Load configuration, falling back to defaults if the file is missing.

    Parse and validation errors still propagate.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default ReclaimConfig.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return ReclaimConfig()


def save_config(config: ReclaimConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        config: The ReclaimConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
