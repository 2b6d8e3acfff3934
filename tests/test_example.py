"""
Tests for the example daemon and command line wiring.
"""
import argparse
import json
import os
import tempfile
import threading
import unittest
from unittest.mock import MagicMock, patch

from daemon_control.__main__ import build_daemon, main
from daemon_control.example import ExampleConfig, ExampleDaemon
from daemon_control.lifecycle import Daemon


class TestExampleDaemon(unittest.TestCase):
    """Test cases for the example host."""

    def test_callbacks_log(self):
        log = MagicMock()
        host = ExampleDaemon(log)
        host.daemon_start()
        host.daemon_drain()
        host.daemon_stop()
        host.daemon_new_config()
        self.assertEqual(log.info.call_count, 4)

    def test_build_daemon_without_service_config(self):
        args = argparse.Namespace(config_file=None, watch=None, drain=True, log_level='INFO')
        host = build_daemon(args)

        self.assertIsInstance(host.daemon, Daemon)
        self.assertIs(host.daemon.callbacks, host)
        self.assertTrue(host.daemon.config.enable_drain)
        self.assertEqual(host.daemon.config.config_file, "")
        self.assertIsNone(host.daemon.config.config_object)

    def test_build_daemon_with_watched_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.json')
            with open(path, 'w') as f:
                json.dump({"Foo": "a", "Baz": "b"}, f)

            args = argparse.Namespace(config_file=None, watch=path, drain=False, log_level='INFO')
            host = build_daemon(args)
            self.assertIs(host.daemon.config.config_object, host.config)

            host.daemon.config.no_exit = True
            host.daemon.config.handle_signals = False
            host.daemon.config.config_check_interval = 0.01

            worker = threading.Thread(target=host.daemon.run, daemon=True)
            worker.start()
            host.daemon.wait_for_stop(0.05)
            host.stop()
            worker.join(2.0)

        self.assertEqual(host.config, ExampleConfig(foo="a", baz="b"))

    def test_main_returns_status_in_no_exit_mode(self):
        host = MagicMock()
        host.run.return_value = 0

        with patch('daemon_control.__main__.build_daemon', return_value=host), \
                patch('sys.argv', ['daemon_control', '--drain']):
            self.assertEqual(main(), 0)

        host.run.assert_called_once_with()
