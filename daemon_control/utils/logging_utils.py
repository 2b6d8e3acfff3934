"""
Logging utilities for the Daemon Control package.
"""
import logging
import sys
from typing import Dict, Any, Union
from daemon_control.config.config_models import LoggingConfig

# Finer than DEBUG, used for per-poll chatter
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def configure_logging(config: Union[Dict[str, Any], LoggingConfig]) -> None:
    """
    Configure logging based on provided configuration.
    
    Args:
        config: Logging configuration (either a dictionary or LoggingConfig object)
    """
    if isinstance(config, dict):
        config = LoggingConfig.from_dict(config)

    level = config.level.upper()
    log_level = logging.getLevelName(level)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    
    if config.file:
        handlers.append(logging.FileHandler(config.file))
    
    logging.basicConfig(
        level=log_level,
        format=config.format,
        handlers=handlers
    )
    
    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured with level: {level}")


def trace(log: logging.Logger, msg: str) -> None:
    """Log a message at TRACE level."""
    log.log(TRACE, msg)
