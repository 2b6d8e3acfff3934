"""
Main entry point for the daemon_control package.

This file allows running the example daemon with python -m daemon_control
"""

import sys
import logging
import argparse

from daemon_control.config.config_manager import ConfigManager
from daemon_control.config.config_models import DaemonConfig, LoggingConfig
from daemon_control.example import ExampleDaemon
from daemon_control.exceptions import ConfigurationError
from daemon_control.lifecycle import Daemon
from daemon_control.utils.logging_utils import configure_logging

logger = logging.getLogger("daemon_control.__main__")


def build_daemon(args) -> ExampleDaemon:
    """Create the example host and its daemon from the command line arguments."""
    host = ExampleDaemon()

    if args.config_file:
        config_manager = ConfigManager(args.config_file)
        configure_logging(config_manager.get_logging_config())
        config = config_manager.get_daemon_config(callbacks=host, config_object=host.config)
    else:
        configure_logging(LoggingConfig(level=args.log_level))
        config = DaemonConfig.default(host)
        config.config_object = host.config

    if args.watch:
        config.config_file = args.watch
    if args.drain:
        config.enable_drain = True
    if not config.config_file:
        config.config_object = None

    host.daemon = Daemon(config)
    return host


def main():
    """Main entry point for the daemon_control package when run as a module."""
    parser = argparse.ArgumentParser(description='Run the example lifecycle daemon')
    parser.add_argument('--config', dest='config_file', default=None,
                        help='Path to a YAML service configuration file')
    parser.add_argument('--watch', default=None,
                        help='Path to a JSON config file to watch for changes')
    parser.add_argument('--drain', action='store_true',
                        help='Call Drain before Stop on shutdown')
    parser.add_argument('--log-level', default='INFO',
                        help='Log level when no service configuration is given')
    args = parser.parse_args()

    try:
        host = build_daemon(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    # Exits the process itself unless no_exit is configured
    return host.run()


if __name__ == "__main__":
    main()
