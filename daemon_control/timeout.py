"""
Bounded execution of lifecycle callbacks.

``run_bounded`` waits for an operation for at most a given time. It does not
cancel anything: when the deadline passes the operation keeps running on its
own thread, detached from the caller. A ``False`` result therefore means
"completion unknown", never "operation aborted".
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def run_bounded(timeout: float, operation: Callable[[], None],
                name: Optional[str] = None,
                log: Optional[logging.Logger] = None) -> bool:
    """
    Run an operation on a background thread and wait up to ``timeout``.
    
    Args:
        timeout: Seconds to wait for the operation to finish
        operation: Zero-argument callable to run
        name: Optional name used for the thread and in log messages
        log: Logger used to report exceptions raised by the operation
        
    Returns:
        bool: True if the operation finished before the deadline, False otherwise
    """
    log = log or logger
    name = name or getattr(operation, '__name__', 'operation')
    done = threading.Event()

    def _target():
        try:
            operation()
        except Exception:
            # The operation returned, even if badly
            log.exception(f"Unhandled error in {name}")
        finally:
            done.set()

    thread = threading.Thread(target=_target, name=f"bounded-{name}", daemon=True)
    thread.start()
    return done.wait(timeout)
