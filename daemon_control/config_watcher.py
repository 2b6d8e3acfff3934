"""
Config file watcher for the Daemon.

Polls the modification time of a config file and, when it changes, decodes
the file into the host's config object and notifies the host.
"""

import os
import time
import logging
import threading
from typing import Any, Callable, Optional

from daemon_control.config.config_decoder import apply_config, decode_config
from daemon_control.exceptions import ConfigDecodeError
from daemon_control.utils.logging_utils import trace

logger = logging.getLogger(__name__)


class ConfigWatcher:
    """
    Polls a config file at a fixed interval.

    The watcher never triggers a shutdown itself; it stops looping once
    ``keep_running`` returns False.
    """

    def __init__(self, path: str, target: Any,
                 on_new_config: Callable[[], None],
                 keep_running: Callable[[], bool],
                 interval: float = 5.0,
                 log: Optional[logging.Logger] = None,
                 wait: Callable[[float], Any] = time.sleep,
                 last_mtime: Optional[int] = None):
        """
        Initialize the config watcher.

        Args:
            path: Path to the config file
            target: Object the decoded config is written to
            on_new_config: Called after a new config has been applied
            keep_running: Returns False once the watcher should exit
            interval: Seconds between polls
            log: Logger for watcher messages
            wait: Called with the interval between polls
            last_mtime: Modification time already loaded by an earlier watcher
        """
        self.path = path
        self.target = target
        self.on_new_config = on_new_config
        self.keep_running = keep_running
        self.interval = interval
        self.log = log or logger
        self.wait = wait
        self.last_mtime = last_mtime
        self.thread: Optional[threading.Thread] = None

    def poll(self) -> bool:
        """
        Check the file once and reload it if it changed.

        Returns:
            bool: True if a new config was applied
        """
        try:
            stat = os.stat(self.path)
        except OSError as e:
            self.log.error(f"Unable to Stat Config File: {e}")
            return False

        if self.last_mtime is not None and stat.st_mtime_ns == self.last_mtime:
            trace(self.log, "Config file not changed")
            return False
        self.last_mtime = stat.st_mtime_ns

        try:
            with open(self.path, 'rb') as f:
                raw = f.read()
        except OSError as e:
            self.log.error(f"Unable to Read Config: {e}")
            return False

        try:
            data = decode_config(raw, self.path)
            apply_config(self.target, data, self.path)
        except ConfigDecodeError as e:
            self.log.error(str(e))
            return False

        self.log.debug(f"Loaded new config from {self.path}")
        try:
            self.on_new_config()
        except Exception:
            self.log.exception("Unhandled error in NewConfig callback")
        return True

    def watch(self) -> None:
        """Poll until ``keep_running`` returns False."""
        while self.keep_running():
            try:
                self.poll()
            except Exception:
                self.log.exception("Error while polling config file")
            self.wait(self.interval)
        trace(self.log, "ConfigWatcher stopped")

    def start(self) -> threading.Thread:
        """Run ``watch`` on a background thread."""
        self.thread = threading.Thread(target=self.watch, name="config-watcher", daemon=True)
        self.thread.start()
        return self.thread
