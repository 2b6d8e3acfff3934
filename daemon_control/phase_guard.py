"""
Run state of a Daemon, guarded by a single lock.

Every compound transition (begin a cycle, claim the stop sequence, consume
the drain flag) happens inside one critical section so concurrent stop
triggers cannot both win.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Phase(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPING = "stopping"
    STOPPED = "stopped"


@dataclass(frozen=True)
class StopTicket:
    """Handed to the single caller that wins the stop sequence."""
    drain: bool


class PhaseGuard:
    """
    Running flag, phase and single-fire stop signal for one daemon.

    A fresh stop event is created by each ``begin_cycle`` and is only ever
    set once, by ``finish``.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._phase = Phase.IDLE
        self._running = False
        self._drain_enabled = False
        self._stop_claimed = False
        self._exit_status = 0
        self._stopped: Optional[threading.Event] = None
        self._started: Optional[threading.Event] = None
        self._start_ok = False

    @property
    def phase(self) -> Phase:
        with self._lock:
            return self._phase

    @property
    def exit_status(self) -> int:
        with self._lock:
            return self._exit_status

    @property
    def stop_event(self) -> Optional[threading.Event]:
        """Stop event of the current (or last) cycle."""
        with self._lock:
            return self._stopped

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def set_phase(self, phase: Phase) -> None:
        with self._lock:
            self._phase = phase

    def begin_cycle(self, drain_enabled: bool) -> bool:
        """
        Start a new run cycle.

        Args:
            drain_enabled: Whether the stop sequence of this cycle runs Drain

        Returns:
            bool: False if a cycle is already active
        """
        with self._lock:
            if self._phase not in (Phase.IDLE, Phase.STOPPED):
                return False
            self._phase = Phase.STARTING
            self._running = True
            self._drain_enabled = drain_enabled
            self._stop_claimed = False
            self._exit_status = 0
            self._start_ok = False
            self._stopped = threading.Event()
            self._started = threading.Event()
            return True

    def mark_started(self, ok: bool, failure_status: int = 1) -> None:
        """Record the outcome of Start and release anyone waiting on it."""
        with self._lock:
            self._start_ok = ok
            if ok:
                if not self._stop_claimed:
                    self._phase = Phase.RUNNING
            else:
                self._exit_status = failure_status
            started = self._started
        started.set()

    def wait_started(self) -> bool:
        """Block until Start has returned or timed out; True if it returned."""
        with self._lock:
            started = self._started
        if started is None:
            return False
        started.wait()
        with self._lock:
            return self._start_ok

    def disable_drain(self) -> None:
        """Skip Drain for the current cycle only."""
        with self._lock:
            self._drain_enabled = False

    def begin_stop(self) -> Optional[StopTicket]:
        """
        Claim the stop sequence for the current cycle.

        Returns:
            StopTicket for the first caller, None for everyone else or when
            no cycle is active
        """
        with self._lock:
            if self._stopped is None or self._stop_claimed or self._stopped.is_set():
                return None
            self._stop_claimed = True
            self._running = False
            drain = self._drain_enabled
            self._drain_enabled = False
            return StopTicket(drain=drain)

    def finish(self, status: int = 0) -> None:
        """End the cycle; a Start failure status already recorded is kept."""
        with self._lock:
            if self._exit_status == 0:
                self._exit_status = status
            self._running = False
            self._phase = Phase.STOPPED
            stopped = self._stopped
        stopped.set()

    def abort(self, status: int) -> None:
        """End the cycle without a stop sequence after an unexpected error."""
        with self._lock:
            self._exit_status = status
            self._running = False
            self._stop_claimed = True
            self._phase = Phase.STOPPED
            started = self._started
            stopped = self._stopped
        started.set()
        stopped.set()

    def wait_stopped(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the current cycle to finish.

        Returns:
            bool: True if the cycle finished (or none was ever started)
        """
        with self._lock:
            stopped = self._stopped
        if stopped is None:
            return True
        return stopped.wait(timeout)
