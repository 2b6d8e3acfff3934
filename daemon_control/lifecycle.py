"""
Daemon lifecycle management.

This module provides the Daemon, which drives a host's lifecycle callbacks
through a fixed sequence: Start, then wait for a stop request, then Drain
(optional) and Stop. Each callback is bounded by a timeout.

Timeouts do not cancel callbacks. A callback that overruns keeps running on
its own thread; the daemon only changes what it logs and does next.
"""

import dataclasses
import logging
import os
import sys
from typing import Optional

from daemon_control.callbacks import DaemonCallbacks
from daemon_control.config.config_models import DaemonConfig
from daemon_control.config_watcher import ConfigWatcher
from daemon_control.exceptions import ConfigurationError
from daemon_control.phase_guard import Phase, PhaseGuard
from daemon_control.signal_bridge import SignalBridge
from daemon_control.timeout import run_bounded
from daemon_control.utils.logging_utils import trace

EXIT_OK = 0
EXIT_START_TIMEOUT = 1
EXIT_STOP_TIMEOUT = 2
EXIT_ERROR = 3


class Daemon:
    """
    Runs a host's lifecycle callbacks.

    ``run`` blocks until the stop sequence has completed. The stop sequence
    runs at most once per run cycle no matter how many signals, ``stop``
    calls or failures request it.
    """

    def __init__(self, config: DaemonConfig):
        """
        Initialize the daemon.

        Args:
            config: Daemon configuration; ``log`` and ``callbacks`` are required

        Raises:
            ConfigurationError: If the configuration is incomplete
        """
        if config.log is None:
            raise ConfigurationError("log cannot be None")
        if config.callbacks is None:
            raise ConfigurationError("callbacks cannot be None")
        if config.config_file and config.config_object is None:
            raise ConfigurationError("config_object is required when config_file is set")

        self.config = config
        self.callbacks: DaemonCallbacks = config.callbacks
        self.log = config.log
        self.signal_bridge = SignalBridge(self._handle_exit, self.log)
        self.config_watcher: Optional[ConfigWatcher] = None
        self._guard = PhaseGuard()
        self._active = config

    @classmethod
    def default(cls, callbacks: DaemonCallbacks) -> 'Daemon':
        """Create a daemon with the default configuration."""
        return cls(DaemonConfig.default(callbacks))

    @property
    def phase(self) -> Phase:
        return self._guard.phase

    def is_running(self) -> bool:
        """Return True while the current cycle has not begun stopping."""
        return self._guard.is_running()

    def disable_drain(self) -> None:
        """Skip Drain in the current cycle's stop sequence."""
        self._guard.disable_drain()

    def run(self) -> Optional[int]:
        """
        Run one cycle: start the host and block until it has been stopped.

        Returns:
            The exit status of the cycle, or None if a cycle was already
            active and this call was rejected
        """
        config = dataclasses.replace(self.config)
        if not self._guard.begin_cycle(config.enable_drain):
            self.log.error("Can't call Run again... Already running")
            return None
        self._active = config

        try:
            if config.config_file:
                self._start_config_watcher(config)

            if config.handle_signals:
                self.signal_bridge.install()

            self.log.debug("Daemon starting")
            if run_bounded(config.start_timeout, self.callbacks.daemon_start, "Start", self.log):
                self._guard.mark_started(True)
                self.log.debug(f"Daemon Started, PID {os.getpid()}")
            else:
                self.log.error("Timeout waiting for Start")
                self._guard.mark_started(False, EXIT_START_TIMEOUT)
                self._handle_exit("start timeout")

            self._guard.wait_stopped()
        except Exception:
            self.log.exception("Daemon failed before it could be stopped")
            self._guard.abort(EXIT_ERROR)
            raise
        finally:
            self.signal_bridge.uninstall()

        status = self._guard.exit_status
        trace(self.log, f"STOP received, Exit Code {status}")
        return status

    def _start_config_watcher(self, config: DaemonConfig) -> None:
        """Load the config file once, then keep watching it for this cycle."""
        last_mtime = None
        previous = self.config_watcher
        if previous is not None:
            # Only one watcher may write to the target at a time
            if previous.thread is not None:
                previous.thread.join()
            if previous.path == config.config_file:
                last_mtime = previous.last_mtime

        stopped = self._guard.stop_event
        self.config_watcher = ConfigWatcher(
            path=config.config_file,
            target=config.config_object,
            on_new_config=self.callbacks.daemon_new_config,
            keep_running=lambda: self._guard.is_running() and not stopped.is_set(),
            interval=config.config_check_interval,
            log=self.log,
            wait=stopped.wait,
            last_mtime=last_mtime
        )
        # First config is in place before Start
        self.config_watcher.poll()
        self.config_watcher.start()

    def serve(self) -> Optional[int]:
        """Run one cycle, then exit the process with its status unless ``no_exit``."""
        status = self.run()
        if status is not None:
            self.try_exit(status)
        return status

    def try_exit(self, status: int) -> None:
        """Exit the process with ``status`` unless the daemon is in no-exit mode."""
        if not self._active.no_exit:
            sys.exit(status)

    def stop(self) -> None:
        """Request a stop and block until the stop sequence has completed."""
        self._handle_exit("stop requested")
        self._guard.wait_stopped()

    def wait_for_stop(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the current cycle to finish.

        Returns:
            bool: False if the timeout expired first
        """
        return self._guard.wait_stopped(timeout)

    def _handle_exit(self, reason: str) -> bool:
        """
        Run the stop sequence if nobody else has claimed it.

        Args:
            reason: What triggered the stop, for logging

        Returns:
            bool: True if this call ran the stop sequence
        """
        ticket = self._guard.begin_stop()
        if ticket is None:
            trace(self.log, f"Stop already in progress, ignoring {reason}")
            return False

        config = self._active
        self.log.debug(f"Daemon stopping: {reason}")
        status = EXIT_OK

        # Drain and Stop never overlap an in-flight Start
        if not self._guard.wait_started():
            self.log.error("Start did not complete, skipping Drain and Stop")
        else:
            if ticket.drain:
                self._guard.set_phase(Phase.DRAINING)
                self.log.debug("Daemon draining")
                if not run_bounded(config.drain_timeout, self.callbacks.daemon_drain, "Drain", self.log):
                    self.log.error("Timed out waiting for Drain")

            self._guard.set_phase(Phase.STOPPING)
            if not run_bounded(config.stop_timeout, self.callbacks.daemon_stop, "Stop", self.log):
                self.log.error("Timed out waiting for Stop")
                if config.stop_timeout_fatal:
                    status = EXIT_STOP_TIMEOUT

        self._guard.finish(status)
        self.log.debug(f"Daemon stopped, exit status {self._guard.exit_status}")
        return True
