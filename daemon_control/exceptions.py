"""
Exceptions raised by the Daemon Control package.
"""


class DaemonError(Exception):
    """Base class for all daemon control errors."""


class ConfigurationError(DaemonError):
    """Raised when a daemon is constructed from an invalid configuration."""


class ConfigDecodeError(DaemonError):
    """Raised when a watched config file cannot be decoded into its target."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Config File Decode Error in {path}: {reason}")
