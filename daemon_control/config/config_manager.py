"""
Configuration management for the Daemon Control package.
"""
import yaml
import logging
from typing import Any
from daemon_control.config.config_models import DaemonConfig, LoggingConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Loads the service configuration file that tunes the daemon itself.

    The file is YAML with an optional ``daemon`` section (timeouts, watched
    config file, flags) and an optional ``logging`` section.
    """
    
    def __init__(self, service_config_path: str):
        """
        Initialize the configuration manager.
        
        Args:
            service_config_path: Path to the service configuration file
        """
        self.service_config_path = service_config_path
        self.reload()
        
        logger.info(f"Configuration manager initialized with service config from {service_config_path}")
        
    def reload(self) -> bool:
        """
        Reload configuration from the service file.
        
        Returns:
            bool: True if reloaded successfully, False otherwise
        """
        self.service_config = self._load_yaml(self.service_config_path)
        if self.service_config is None:
            self.service_config = {}
            self.logging_config = LoggingConfig()
            return False

        self.logging_config = LoggingConfig.from_dict(self.service_config.get('logging', {}))
        return True
            
    def _load_yaml(self, file_path: str):
        """
        Load a YAML file.
        
        Args:
            file_path: Path to the YAML file
            
        Returns:
            Parsed YAML content as dictionary, or None if it could not be loaded
        """
        try:
            with open(file_path, 'r') as file:
                content = yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading configuration from {file_path}: {e}")
            return None

        if not isinstance(content, dict):
            logger.error(f"Configuration in {file_path} is not a mapping")
            return None
        return content
        
    def get_daemon_config(self, callbacks: Any = None, config_object: Any = None) -> DaemonConfig:
        """
        Get the daemon configuration.
        
        Args:
            callbacks: Lifecycle callbacks of the host
            config_object: Target for the watched config file, if any

        Returns:
            Daemon configuration object
        """
        return DaemonConfig.from_dict(
            self.service_config.get('daemon', {}),
            callbacks=callbacks,
            config_object=config_object
        )
        
    def get_logging_config(self) -> LoggingConfig:
        """
        Get logging configuration.
        
        Returns:
            Logging configuration object
        """
        return self.logging_config
