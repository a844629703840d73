"""
runalone: make sure only one invocation of a program is active at a time.

    import runalone
    runalone.lock()                   # exit 1 if another copy holds the lock
    runalone.lock(retry="55,60")      # retry 55 times, 60 seconds apart
    runalone.lock(silent=True)        # exit quietly when already running

Environment overrides: SILENT_SYS_RUNALONE, RETRY_SYS_RUNALONE,
SKIP_SYS_RUNALONE.
"""

from .core import (
    ConfigError,
    GuardConfig,
    Outcome,
    RetrySchedule,
    RunAloneError,
    RunAloneGuard,
    lock,
    resolve_config,
)

__version__ = "0.1.0"

__all__ = [
    "lock",
    "RunAloneGuard",
    "Outcome",
    "GuardConfig",
    "RetrySchedule",
    "resolve_config",
    "RunAloneError",
    "ConfigError",
    "__version__",
]
