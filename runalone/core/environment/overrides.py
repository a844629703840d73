"""
Operator Bypass of the Instance Guard.

SKIP_SYS_RUNALONE lets the same program run alongside another incarnation of
itself (for instance with different parameters). It is evaluated before any
lock target is looked up.

Levels:
    * unset / falsy -> SKIP_OFF, the guard runs normally
    * truthy        -> SKIP_QUIET, the guard is bypassed
    * numeric > 1   -> SKIP_VERBOSE, bypassed with a notice on stderr
"""

import os
import re
from typing import Mapping, Optional

from ..config.guard_config import is_truthy
from ..paths import ENV_SKIP

SKIP_OFF = 0
SKIP_QUIET = 1
SKIP_VERBOSE = 2

# Leading decimal number, the way shells and Perl read "2x" as 2
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def _leading_number(value: str) -> float:
    match = _LEADING_NUMBER.match(value)
    return float(match.group(0)) if match else 0.0


def skip_level(environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Reads the skip override from the environment.

    The level comes from the value's leading number, so ``2x`` is verbose
    while values without one (``yes``, ``true``) bypass quietly.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        One of SKIP_OFF, SKIP_QUIET, SKIP_VERBOSE
    """
    environ = os.environ if environ is None else environ
    value = environ.get(ENV_SKIP)

    if value is None or not is_truthy(value):
        return SKIP_OFF

    return SKIP_VERBOSE if _leading_number(value) > 1 else SKIP_QUIET
