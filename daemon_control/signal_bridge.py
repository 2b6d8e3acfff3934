"""
Bridge between process signals and the Daemon's stop sequence.
"""

import logging
import signal
import threading
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

TERMINATE_SIGNALS = (signal.SIGINT, signal.SIGTERM)
# Not available on every platform
RELOAD_SIGNAL = getattr(signal, 'SIGHUP', None)


class SignalBridge:
    """
    Forwards SIGINT and SIGTERM to a terminate callback.

    SIGHUP is subscribed as the reload slot but currently does nothing
    beyond logging.
    """

    def __init__(self, on_terminate: Callable[[str], Any],
                 log: Optional[logging.Logger] = None):
        """
        Initialize the signal bridge.

        Args:
            on_terminate: Called with a reason string on a termination signal
            log: Logger for bridge messages
        """
        self.on_terminate = on_terminate
        self.log = log or logger
        self._previous: Dict[int, Any] = {}

    @property
    def installed(self) -> bool:
        return bool(self._previous)

    def install(self) -> bool:
        """
        Register the signal handlers.

        Returns:
            bool: False if handlers cannot be installed from this thread
        """
        if threading.current_thread() is not threading.main_thread():
            self.log.debug("Not on the main thread, signal handling disabled")
            return False

        signals = list(TERMINATE_SIGNALS)
        if RELOAD_SIGNAL is not None:
            signals.append(RELOAD_SIGNAL)
        for sig in signals:
            self._previous[sig] = signal.signal(sig, self._handle_signal)
        return True

    def uninstall(self) -> None:
        """Restore the handlers that were active before ``install``."""
        if self._previous and threading.current_thread() is threading.main_thread():
            for sig, handler in self._previous.items():
                signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
            self._previous.clear()

    def _handle_signal(self, signum, frame) -> None:
        """
        Handle a process signal.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        name = signal.Signals(signum).name
        if signum in TERMINATE_SIGNALS:
            self.log.debug(f"Received {name}, stopping")
            # Handlers run on the main thread, which may be blocked in run()
            threading.Thread(
                target=self.on_terminate, args=(name,),
                name=f"stop-{name}", daemon=True
            ).start()
        elif signum == RELOAD_SIGNAL:
            self.log.debug(f"Received {name}, reload is not handled")
