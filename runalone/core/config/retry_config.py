"""
Retry Schedule Schema.

Declarative description of how long a contended guard keeps trying before
giving up. The schedule is deliberately a fixed-interval poll: periodic batch
jobs benefit from predictable start times far more than from network-style
exponential backoff.

Accepted textual forms:
    * ``"N"``   -> N re-attempts, 1 second apart
    * ``"N,M"`` -> N re-attempts, M seconds apart

An empty or zero interval part (``"5,"``, ``"5,0"``) falls back to one
second. Anything else (signs, letters, extra fields) is rejected.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import re
from typing import Union

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# =========================================================================== #
#                               Internal Imports                              #
# =========================================================================== #
from ..exceptions import ConfigError
from .types import RetryCount, RetryInterval

_DIGITS = re.compile(r"^[0-9]+$")

DEFAULT_INTERVAL = 1


# =========================================================================== #
#                              RETRY SCHEDULE                                 #
# =========================================================================== #

class RetrySchedule(BaseModel):
    """
    Bounded re-attempt policy for a contended lock.

    Attributes:
        times: Number of re-attempts after the initial failure.
        interval: Seconds to sleep before each re-attempt.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid"
    )

    times: RetryCount = Field(
        default=0,
        description="Re-attempts after the first failed lock"
    )
    interval: RetryInterval = Field(
        default=DEFAULT_INTERVAL,
        description="Seconds between re-attempts"
    )

    @property
    def enabled(self) -> bool:
        """True when at least one re-attempt is scheduled."""
        return self.times > 0

    @property
    def max_wait(self) -> int:
        """Upper bound in seconds spent sleeping before giving up."""
        return self.times * self.interval

    @classmethod
    def parse(cls, value: Union[str, int]) -> "RetrySchedule":
        """
        Builds a schedule from the ``"N"`` / ``"N,M"`` notation.

        Plain non-negative integers are accepted as the ``"N"`` form.

        Args:
            value: Retry notation from setup options or the environment.

        Returns:
            Validated RetrySchedule.

        Raises:
            ConfigError: If the value is not in "N" or "N,M" form.
        """
        if isinstance(value, bool):
            raise ConfigError(f"Invalid retry value: {value!r}")

        if isinstance(value, int):
            times_raw, interval_raw = str(value), ""
        elif isinstance(value, str):
            parts = [part.strip() for part in value.strip().split(",")]
            if len(parts) > 2:
                raise ConfigError(f"Invalid retry value: {value!r} (expected 'N' or 'N,M')")
            times_raw = parts[0]
            interval_raw = parts[1] if len(parts) == 2 else ""
        else:
            raise ConfigError(f"Invalid retry value: {value!r}")

        if not _DIGITS.match(times_raw):
            raise ConfigError(f"Invalid retry count in {value!r}: must be a non-negative integer")
        if interval_raw and not _DIGITS.match(interval_raw):
            raise ConfigError(f"Invalid retry interval in {value!r}: must be a non-negative integer")

        interval = int(interval_raw) if interval_raw else 0

        try:
            return cls(times=int(times_raw), interval=interval or DEFAULT_INTERVAL)
        except ValidationError as e:
            raise ConfigError(f"Invalid retry value {value!r}: {e}") from e

    def __str__(self) -> str:
        return f"{self.times},{self.interval}"
