"""
Logging Management Module

Handles the diagnostic stream used by the guard. Operator-facing messages
("A copy of 'job.py' is already running") go to standard error so that they
reach cron mail and never mix with the guarded program's own stdout.

Key Features:
    - Singleton-like Behavior: Prevents duplicate handler registration
    - Dynamic Reconfiguration: Level and format can be changed via setup()
    - DEBUG override: ``DEBUG=1`` in the environment forces DEBUG level
"""

# Standard Imports
import logging
import os
import sys
from typing import Dict, Final, Optional, TextIO

# Internal Imports
from ..paths import LOGGER_NAME

# Plain messages keep operator output identical to the documented wording
DEFAULT_FORMAT: Final[str] = "%(message)s"
DEBUG_FORMAT: Final[str] = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


# LOGGER CLASS
class Logger:
    """
    Manages the guard's logger configuration with singleton-like behavior.

    The first instantiation for a given name installs a single stream handler;
    later instantiations reuse it unless ``reconfigure`` is requested, so
    importing the package from several modules never duplicates output.

    Class Attributes:
        _configured_names (Dict[str, bool]): Logger names already configured

    Attributes:
        name (str): Logger identifier (typically LOGGER_NAME)
        level (int): Logging level
        fmt (str): Record format string
        stream (TextIO): Destination stream (default: sys.stderr)
        logger (logging.Logger): Underlying Python logger instance

    Example:
        >>> log = Logger().get_logger()
        >>> log.error("A copy of 'job.py' is already running")
    """

    _configured_names: Final[Dict[str, bool]] = {}

    def __init__(
        self,
        name: str = LOGGER_NAME,
        level: int = logging.INFO,
        fmt: str = DEFAULT_FORMAT,
        stream: Optional[TextIO] = None,
        reconfigure: bool = False,
    ):
        self.name = name
        self.level = level
        self.fmt = fmt
        self.stream = stream if stream is not None else sys.stderr

        self.logger = logging.getLogger(name)

        if name not in Logger._configured_names or reconfigure:
            self._setup_logger()
            Logger._configured_names[name] = True

    def _setup_logger(self) -> None:
        """
        Installs a single stream handler, removing any previous one.

        Propagation is disabled so that host applications with their own root
        handlers do not print guard diagnostics twice.
        """
        formatter = logging.Formatter(self.fmt, DATE_FORMAT)

        self.logger.setLevel(self.level)
        self.logger.propagate = False

        # Clean up existing handlers to prevent duplicates during reconfiguration
        if self.logger.hasHandlers():
            for handler in self.logger.handlers[:]:
                handler.close()
                self.logger.removeHandler(handler)

        console_h = logging.StreamHandler(self.stream)
        console_h.setFormatter(formatter)
        self.logger.addHandler(console_h)

    def get_logger(self) -> logging.Logger:
        """Returns the configured logging.Logger instance."""
        return self.logger

    @classmethod
    def setup(
        cls,
        name: str = LOGGER_NAME,
        level: str = "INFO",
        **kwargs,
    ) -> logging.Logger:
        """
        Main entry point for (re)configuring the guard logger.

        Bridges level names (INFO, DEBUG, WARNING) to logging constants.
        When DEBUG mode is active the format gains timestamps and levels.

        Args:
            name: Logger identifier
            level: Logging level as string
            **kwargs: Additional arguments passed to the constructor

        Environment Variables:
            DEBUG: If set to "1", overrides level to DEBUG

        Returns:
            Configured logging.Logger instance
        """
        if os.getenv("DEBUG") == "1":
            numeric_level = logging.DEBUG
            kwargs.setdefault("fmt", DEBUG_FORMAT)
        else:
            numeric_level = getattr(logging, level.upper(), logging.INFO)

        return cls(name=name, level=numeric_level, reconfigure=True, **kwargs).get_logger()


# GLOBAL INSTANCE
# Bootstrap instance; setup() may reconfigure it later.
logger: Final[logging.Logger] = Logger().get_logger()
