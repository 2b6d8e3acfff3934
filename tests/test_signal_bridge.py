"""
Tests for the SignalBridge.
"""
import signal
import threading
import unittest
from unittest.mock import MagicMock

from daemon_control.signal_bridge import SignalBridge


class TestSignalBridge(unittest.TestCase):
    """Test cases for the SignalBridge."""

    def setUp(self):
        self.stopped = threading.Event()
        self.on_terminate = MagicMock(side_effect=lambda reason: self.stopped.set())
        self.bridge = SignalBridge(self.on_terminate, MagicMock())

    def tearDown(self):
        self.bridge.uninstall()

    def test_install_and_uninstall_restore_handlers(self):
        """Handlers are installed on the main thread and restored afterwards."""
        previous = signal.getsignal(signal.SIGTERM)

        self.assertTrue(self.bridge.install())
        self.assertEqual(signal.getsignal(signal.SIGTERM), self.bridge._handle_signal)
        self.assertTrue(self.bridge.installed)

        self.bridge.uninstall()
        self.assertEqual(signal.getsignal(signal.SIGTERM), previous)
        self.assertFalse(self.bridge.installed)

    def test_terminate_signal_triggers_stop(self):
        """SIGTERM calls the terminate callback on another thread."""
        self.bridge._handle_signal(signal.SIGTERM, None)

        self.assertTrue(self.stopped.wait(1.0))
        self.on_terminate.assert_called_once_with("SIGTERM")

    @unittest.skipUnless(hasattr(signal, 'SIGHUP'), "SIGHUP not available")
    def test_reload_signal_is_a_no_op(self):
        """SIGHUP is reserved and does not stop anything."""
        self.bridge._handle_signal(signal.SIGHUP, None)

        self.assertFalse(self.stopped.wait(0.1))
        self.on_terminate.assert_not_called()

    def test_install_off_main_thread_is_inert(self):
        """Signal handlers cannot be installed from a worker thread."""
        results = []
        worker = threading.Thread(target=lambda: results.append(self.bridge.install()))
        worker.start()
        worker.join()

        self.assertEqual(results, [False])
        self.assertFalse(self.bridge.installed)
