"""
Protocol Constants Package.

Centralizes the environment variable names, exit codes and logger
namespace shared by every layer of the guard.
"""

# Public Interface
from .constants import (
    ENV_RETRY,
    ENV_SILENT,
    ENV_SKIP,
    EXIT_ALREADY_RUNNING,
    EXIT_CONFIG_ERROR,
    EXIT_NO_LOCK_TARGET,
    FALSY_ENV_VALUES,
    LOGGER_NAME,
    get_program_name,
)

# Export Schema
__all__ = [
    "LOGGER_NAME",
    "ENV_SILENT",
    "ENV_RETRY",
    "ENV_SKIP",
    "FALSY_ENV_VALUES",
    "EXIT_ALREADY_RUNNING",
    "EXIT_NO_LOCK_TARGET",
    "EXIT_CONFIG_ERROR",
    "get_program_name",
]
