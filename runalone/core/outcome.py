"""Terminal results of a single guard run."""

from enum import Enum


class Outcome(Enum):
    """
    Exactly one Outcome is produced per guard run and consumed once by the
    TerminationPolicy.
    """

    SKIPPED = "skipped"
    ACQUIRED = "acquired"
    ALREADY_RUNNING = "already_running"
    NO_LOCK_TARGET = "no_lock_target"
    CONFIG_ERROR = "config_error"

    @property
    def proceeds(self) -> bool:
        """True when the host program may continue its main work."""
        return self in (Outcome.SKIPPED, Outcome.ACQUIRED)
