"""
Lifecycle callbacks a host hands to a Daemon.
"""


class DaemonCallbacks:
    """
    The four lifecycle callbacks, each a no-op by default.

    Subclass and override the ones you need. Callbacks take no arguments,
    return nothing and must handle their own errors; an exception escaping
    a callback is only logged.
    """

    def daemon_start(self) -> None:
        """Called once per run cycle, bounded by the start timeout."""

    def daemon_drain(self) -> None:
        """Called before stop when draining is enabled for the cycle."""

    def daemon_stop(self) -> None:
        """Called once per run cycle, bounded by the stop timeout."""

    def daemon_new_config(self) -> None:
        """Called after the watched config file has been reloaded."""


class DaemonHelpers(DaemonCallbacks):
    """
    Callbacks base that can also drive its own Daemon.

    Assign ``daemon`` after constructing the Daemon.
    """

    daemon = None

    def run(self) -> int:
        """Run the daemon and exit the process unless ``no_exit`` is set."""
        return self.daemon.serve()

    def stop(self) -> None:
        """Request a stop and wait for it to complete."""
        self.daemon.stop()
