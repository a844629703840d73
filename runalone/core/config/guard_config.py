"""
Guard Configuration & Resolution.

Merges setup-time options supplied by the host program with environment
overrides into one immutable GuardConfig. Environment variables always win
when present, regardless of when the host supplied its options, so an
operator can silence or reschedule a job without touching its code.

Resolution Order:
    1. Normalize caller options (mapping, legacy ``"silent"`` string, or None)
    2. Reject unknown option keys
    3. Apply SILENT_SYS_RUNALONE / RETRY_SYS_RUNALONE when present
    4. Parse the retry notation and freeze the result

Resolution has no side effects: the same inputs always produce an equal
GuardConfig.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import os
from typing import Any, Dict, Mapping, Optional, Union

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# =========================================================================== #
#                               Internal Imports                              #
# =========================================================================== #
from ..exceptions import ConfigError
from ..paths import ENV_RETRY, ENV_SILENT, FALSY_ENV_VALUES
from .retry_config import RetrySchedule

KNOWN_OPTIONS = ("silent", "retry")

# Obsolete single-argument form of silent=True
LEGACY_SILENT = "silent"

GuardOptions = Union[Mapping[str, Any], str, None]


# =========================================================================== #
#                             GUARD CONFIGURATION                             #
# =========================================================================== #

class GuardConfig(BaseModel):
    """
    Fully resolved instance-guard configuration.

    Attributes:
        silent: Suppress contention and skip diagnostics.
        retry: Re-attempt policy, or None to give up on the first failure.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid"
    )

    silent: bool = Field(
        default=False,
        description="Suppress non-fatal diagnostics"
    )
    retry: Optional[RetrySchedule] = Field(
        default=None,
        description="Retry schedule applied on lock contention"
    )


# =========================================================================== #
#                                  HELPERS                                    #
# =========================================================================== #

def is_truthy(value: Any) -> bool:
    """
    Interprets an option or environment value as a boolean.

    Strings are compared against FALSY_ENV_VALUES (case-insensitive, stripped);
    every other string is true. Non-strings use Python truthiness.
    """
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_ENV_VALUES
    return bool(value)


def _normalize_options(options: GuardOptions) -> Dict[str, Any]:
    if options is None:
        return {}

    if isinstance(options, str):
        if options == LEGACY_SILENT:
            return {"silent": True}
        raise ConfigError(f"Don't know what to do with: {options}")

    if not isinstance(options, Mapping):
        raise ConfigError(
            f"Options must be a mapping of {', '.join(KNOWN_OPTIONS)}, "
            f"got {type(options).__name__}"
        )

    unknown = sorted(str(key) for key in options if key not in KNOWN_OPTIONS)
    if unknown:
        raise ConfigError(f"Don't know what to do with: {' '.join(unknown)}")

    return dict(options)


def _coerce_retry(value: Any) -> Optional[RetrySchedule]:
    if value is None or value is False or value == "":
        return None
    if isinstance(value, RetrySchedule):
        schedule = value
    else:
        schedule = RetrySchedule.parse(value)
    # zero re-attempts behaves exactly like no schedule
    return schedule if schedule.enabled else None


# =========================================================================== #
#                                 RESOLVER                                    #
# =========================================================================== #

def resolve_config(
    options: GuardOptions = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GuardConfig:
    """
    Resolves the effective guard configuration.

    Args:
        options: Setup-time options: a mapping with ``silent`` and/or
            ``retry``, the legacy string ``"silent"``, or None.
        environ: Environment to read overrides from (default: os.environ).

    Returns:
        Frozen GuardConfig.

    Raises:
        ConfigError: On unknown option keys or malformed values.
    """
    environ = os.environ if environ is None else environ
    raw = _normalize_options(options)

    silent = is_truthy(raw.get("silent", False))
    retry = raw.get("retry")

    # Presence, not truthiness: SILENT_SYS_RUNALONE=0 un-silences a silent job
    if ENV_SILENT in environ:
        silent = is_truthy(environ[ENV_SILENT])
    if ENV_RETRY in environ:
        retry = environ[ENV_RETRY].strip()

    schedule = _coerce_retry(retry)

    try:
        return GuardConfig(silent=silent, retry=schedule)
    except ValidationError as e:
        raise ConfigError(f"Invalid guard configuration: {e}") from e
