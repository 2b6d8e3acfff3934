"""
A small example daemon showing how a host plugs into Daemon.
"""
import logging
from dataclasses import dataclass

from daemon_control.callbacks import DaemonHelpers

logger = logging.getLogger(__name__)


@dataclass
class ExampleConfig:
    """Settings read from the watched JSON file."""
    foo: str = ""
    baz: str = ""


class ExampleDaemon(DaemonHelpers):
    """Logs every lifecycle event it receives."""

    def __init__(self, log: logging.Logger = None):
        self.config = ExampleConfig()
        self.log = log or logger

    def daemon_start(self) -> None:
        self.log.info("ExampleDaemon Starting")

    def daemon_drain(self) -> None:
        self.log.info("ExampleDaemon Draining....")

    def daemon_stop(self) -> None:
        self.log.info("ExampleDaemon Stopping")

    def daemon_new_config(self) -> None:
        self.log.info(f"ExampleDaemon Got New Config {self.config}")
