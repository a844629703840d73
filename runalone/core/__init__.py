"""
Core Package

Exposes configuration resolution, lock target discovery, the advisory lock,
the termination policy and the RunAloneGuard that ties them together.
"""

# Command Line Interface
from .cli import main, parse_args

# Configuration
from .config.guard_config import GuardConfig, resolve_config
from .config.retry_config import RetrySchedule

# Environment
from .environment import (
    InstanceScanner,
    LockTarget,
    acquire_lock,
    held_locks,
    locate_lock_target,
    skip_level,
)

# Errors
from .exceptions import ConfigError, RunAloneError

# Logging
from .logger import Logger, LogStyle

# Orchestration
from .orchestrator import RunAloneGuard, lock
from .outcome import Outcome
from .policy import TerminationPolicy

# Constants
from .paths import (
    ENV_RETRY,
    ENV_SILENT,
    ENV_SKIP,
    EXIT_ALREADY_RUNNING,
    EXIT_CONFIG_ERROR,
    EXIT_NO_LOCK_TARGET,
    LOGGER_NAME,
)

# Public Interface
__all__ = [
    # Configuration
    "GuardConfig",
    "RetrySchedule",
    "resolve_config",
    # Environment
    "LockTarget",
    "InstanceScanner",
    "acquire_lock",
    "held_locks",
    "locate_lock_target",
    "skip_level",
    # Errors
    "RunAloneError",
    "ConfigError",
    # Logging
    "Logger",
    "LogStyle",
    # Orchestration
    "RunAloneGuard",
    "Outcome",
    "TerminationPolicy",
    "lock",
    # Constants
    "LOGGER_NAME",
    "ENV_SILENT",
    "ENV_RETRY",
    "ENV_SKIP",
    "EXIT_ALREADY_RUNNING",
    "EXIT_NO_LOCK_TARGET",
    "EXIT_CONFIG_ERROR",
    # CLI
    "main",
    "parse_args",
]
