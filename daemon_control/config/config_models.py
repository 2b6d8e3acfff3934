"""
Configuration model classes for the Daemon Control package.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT
    
    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'LoggingConfig':
        """Create a LoggingConfig instance from a dictionary."""
        if not config_dict:
            return cls()
            
        return cls(
            level=config_dict.get('level', cls.level),
            file=config_dict.get('file'),
            format=config_dict.get('format', cls.format)
        )


@dataclass
class DaemonConfig:
    """
    Configuration for a Daemon run cycle.

    All durations are in seconds. The daemon takes a snapshot of this object
    at the start of every run cycle, so changes made while a cycle is active
    only apply to the next one.
    """
    config_file: str = ""
    config_object: Any = None
    log: Optional[logging.Logger] = None
    config_check_interval: float = 5.0
    start_timeout: float = 5.0
    drain_timeout: float = 5.0
    stop_timeout: float = 0.5
    enable_drain: bool = False
    no_exit: bool = False
    stop_timeout_fatal: bool = False
    handle_signals: bool = True
    callbacks: Any = None

    @classmethod
    def default(cls, callbacks: Any = None) -> 'DaemonConfig':
        """Create a configuration with default timeouts and the package logger."""
        return cls(
            log=logging.getLogger('daemon_control'),
            callbacks=callbacks
        )

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any], callbacks: Any = None,
                  config_object: Any = None) -> 'DaemonConfig':
        """
        Create a DaemonConfig instance from a dictionary.

        Args:
            config_dict: The ``daemon`` section of a service configuration
            callbacks: Lifecycle callbacks of the host
            config_object: Target for the watched config file, if any

        Returns:
            DaemonConfig instance
        """
        config_dict = config_dict or {}
        return cls(
            config_file=config_dict.get('config_file', cls.config_file) or "",
            config_object=config_object,
            log=logging.getLogger(config_dict.get('logger', 'daemon_control')),
            config_check_interval=float(config_dict.get('config_check_interval', cls.config_check_interval)),
            start_timeout=float(config_dict.get('start_timeout', cls.start_timeout)),
            drain_timeout=float(config_dict.get('drain_timeout', cls.drain_timeout)),
            stop_timeout=float(config_dict.get('stop_timeout', cls.stop_timeout)),
            enable_drain=bool(config_dict.get('enable_drain', cls.enable_drain)),
            no_exit=bool(config_dict.get('no_exit', cls.no_exit)),
            stop_timeout_fatal=bool(config_dict.get('stop_timeout_fatal', cls.stop_timeout_fatal)),
            handle_signals=bool(config_dict.get('handle_signals', cls.handle_signals)),
            callbacks=callbacks
        )
