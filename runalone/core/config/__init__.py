"""
Configuration Package Initialization.

Provides a flat public API for the guard configuration schemas while
deferring the pydantic import until a schema is first accessed.

Implementation:
    1. __all__: Public API contract
    2. _LAZY_IMPORTS: Mapping from exported names to module paths
    3. __getattr__: Dynamic loader triggered on first access (PEP 562)
    4. __dir__: Introspection support

Example:
    >>> from runalone.core.config import resolve_config
    >>> cfg = resolve_config({"retry": "3,10"})
    >>> cfg.retry.times
    3
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "GuardConfig",
    "RetrySchedule",
    "resolve_config",
    "is_truthy",
    "KNOWN_OPTIONS",
]

# LAZY IMPORTS MAPPING
_LAZY_IMPORTS: dict[str, str] = {
    "GuardConfig": "runalone.core.config.guard_config",
    "RetrySchedule": "runalone.core.config.retry_config",
    "resolve_config": "runalone.core.config.guard_config",
    "is_truthy": "runalone.core.config.guard_config",
    "KNOWN_OPTIONS": "runalone.core.config.guard_config",
}


# LAZY LOADER FUNCTION
def __getattr__(name: str) -> Any:
    """Lazily import configuration components on first access."""
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(_LAZY_IMPORTS[name])
    attr = getattr(module, name)

    # Cache on module for future access
    globals()[name] = attr
    return attr


# DIR SUPPORT
def __dir__() -> list[str]:
    """Sorted public names for dir() and auto-completion."""
    return sorted(__all__)
