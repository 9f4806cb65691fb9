"""Exception hierarchy for reclaim."""


class ReclaimError(Exception):
    """Base exception for reclaim errors."""


class OperationInProgressError(ReclaimError):
    """Raised when a scan or delete is requested while another is running."""


class ConfigError(ReclaimError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class SnapshotError(ReclaimError):
    """Raised when the last-scan snapshot cannot be read or written."""
