"""
Import-time guard.

Importing this module guards the running ``__main__`` program immediately,
using only the environment overrides for configuration:

    import runalone.auto  # noqa: F401
"""

from .core.orchestrator import lock

outcome = lock()
