"""
Configuration package for the Daemon Control package.
"""
from daemon_control.config.config_models import (
    DaemonConfig,
    LoggingConfig
)
from daemon_control.config.config_manager import ConfigManager
from daemon_control.config.config_decoder import apply_config, decode_config

__all__ = [
    'ConfigManager',
    'DaemonConfig',
    'LoggingConfig',
    'apply_config',
    'decode_config'
]
