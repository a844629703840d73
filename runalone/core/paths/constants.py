"""
Process Identity & Protocol Constants.

Single source of truth for the names and numbers the guard exchanges with
the outside world: the environment variables an operator can set, the exit
codes a scheduler observes, and the logger namespace.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import sys
from pathlib import Path
from typing import Final, Optional

# =========================================================================== #
#                               Logging Identity                              #
# =========================================================================== #
LOGGER_NAME: Final[str] = "runalone"

# =========================================================================== #
#                            Environment Overrides                            #
# =========================================================================== #
ENV_SILENT: Final[str] = "SILENT_SYS_RUNALONE"
ENV_RETRY: Final[str] = "RETRY_SYS_RUNALONE"
ENV_SKIP: Final[str] = "SKIP_SYS_RUNALONE"

# Values read as "off" when an override variable is present
FALSY_ENV_VALUES: Final[frozenset] = frozenset({"", "0", "false", "no", "off"})

# =========================================================================== #
#                                 Exit Codes                                  #
# =========================================================================== #
EXIT_ALREADY_RUNNING: Final[int] = 1
EXIT_NO_LOCK_TARGET: Final[int] = 2
EXIT_CONFIG_ERROR: Final[int] = 3


def get_program_name(argv: Optional[list] = None) -> str:
    """
    Returns the program identity shown in operator messages.

    Mirrors what the user typed to start the process (``argv[0]``), so
    symlinked invocations report the link name rather than its target.
    """
    argv = sys.argv if argv is None else argv
    if argv and argv[0]:
        return argv[0]
    return Path(sys.executable).name
