"""
Environment Abstraction Layer.

OS-facing pieces of the instance guard: the operator skip override, lock
target discovery, the advisory lock itself, and process-table inspection
for diagnostics.
"""

# Process & Resource Guards (from .guards)
from .guards import (
    HAS_FCNTL,
    LockTarget,
    acquire_lock,
    find_held_lock,
    held_locks,
    is_held,
    locate_lock_target,
    resolve_module_file,
    resolve_root_program,
    try_lock,
)

# Operator Overrides (from .overrides)
from .overrides import SKIP_OFF, SKIP_QUIET, SKIP_VERBOSE, skip_level

# Process Inspection (from .processes)
from .processes import InstanceScanner

__all__ = [
    # Guards
    "HAS_FCNTL",
    "LockTarget",
    "acquire_lock",
    "find_held_lock",
    "held_locks",
    "is_held",
    "locate_lock_target",
    "resolve_module_file",
    "resolve_root_program",
    "try_lock",
    # Overrides
    "SKIP_OFF",
    "SKIP_QUIET",
    "SKIP_VERBOSE",
    "skip_level",
    # Processes
    "InstanceScanner",
]
