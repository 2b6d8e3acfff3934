"""
Daemon Control package.

This package provides a process lifecycle controller that drives a host's
start, drain, stop and new-config callbacks from OS signals, explicit stop
requests and configuration file changes.
"""

__version__ = '1.0.0'
