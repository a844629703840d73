"""
Termination Policy.

Maps the Outcome of a guard run to caller-visible behavior: either the host
program continues, or the process terminates with a distinct exit code and a
diagnostic on stderr.

| Outcome          | Exit | Silenced by ``silent`` |
|------------------|------|------------------------|
| SKIPPED          | -    | n/a                    |
| ACQUIRED         | -    | n/a                    |
| ALREADY_RUNNING  | 1    | yes                    |
| NO_LOCK_TARGET   | 2    | never                  |
| CONFIG_ERROR     | 3    | never                  |
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import logging
import sys
from typing import Dict, Optional, Sequence

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
from pydantic import BaseModel, ConfigDict

# =========================================================================== #
#                               Internal Imports                              #
# =========================================================================== #
from .outcome import Outcome
from .paths import (
    EXIT_ALREADY_RUNNING,
    EXIT_CONFIG_ERROR,
    EXIT_NO_LOCK_TARGET,
    LOGGER_NAME,
)

EXIT_CODES: Dict[Outcome, int] = {
    Outcome.ALREADY_RUNNING: EXIT_ALREADY_RUNNING,
    Outcome.NO_LOCK_TARGET: EXIT_NO_LOCK_TARGET,
    Outcome.CONFIG_ERROR: EXIT_CONFIG_ERROR,
}


def already_running_message(program: str) -> str:
    return f"A copy of '{program}' is already running"


def no_lock_target_message(program: str) -> str:
    return (
        f"Add a lock-target convention to '{program}' (run it from a script file, "
        f"or declare the calling module) to be able to use the features of runalone"
    )


class TerminationPolicy(BaseModel):
    """
    Terminal step of every guard run.

    Attributes:
        silent: Suppress the contention message. Missing lock targets and
            configuration errors are always reported.
    """
    model_config = ConfigDict(
        frozen=True
    )

    silent: bool = False

    def exit_code(self, outcome: Outcome) -> Optional[int]:
        """Exit code for ``outcome``, or None when execution continues."""
        return EXIT_CODES.get(outcome)

    def resolve(
        self,
        outcome: Outcome,
        program: str,
        logger: Optional[logging.Logger] = None,
        detail: Optional[str] = None,
        notes: Sequence[str] = (),
    ) -> Outcome:
        """
        Applies the policy for ``outcome``.

        Args:
            outcome: Result of the guard run.
            program: Program identity used in messages.
            logger: Diagnostic logger.
            detail: Error text for CONFIG_ERROR.
            notes: Extra lines reported after the contention message.

        Returns:
            The outcome itself when the program may continue.

        Raises:
            SystemExit: For ALREADY_RUNNING, NO_LOCK_TARGET and CONFIG_ERROR.
        """
        log = logger or logging.getLogger(LOGGER_NAME)

        if outcome.proceeds:
            log.debug(f" » runalone outcome for '{program}': {outcome.value}")
            return outcome

        if outcome is Outcome.ALREADY_RUNNING:
            if not self.silent:
                log.error(already_running_message(program))
                for note in notes:
                    log.info(note)
        elif outcome is Outcome.NO_LOCK_TARGET:
            log.error(no_lock_target_message(program))
        else:
            log.error(detail or f"Invalid runalone configuration for '{program}'")

        sys.exit(EXIT_CODES[outcome])
