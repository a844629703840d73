"""
Guard Exception Hierarchy.

Configuration problems are raised as exceptions at the resolution boundary
and converted into a terminal Outcome by the guard. Lock contention and a
missing lock target are not exceptions: they are ordinary outcomes.
"""


class RunAloneError(Exception):
    """Base class for all errors raised by runalone."""


class ConfigError(RunAloneError, ValueError):
    """Invalid setup-time option or environment override."""
