"""
Logging Package.

Exposes the diagnostic logger used by the guard and the shared style
constants for its detail lines.
"""

from .logger import Logger, logger
from .styles import LogStyle

__all__ = ["Logger", "LogStyle", "logger"]
