"""
Instance Guard Orchestration.

This module provides RunAloneGuard, the coordinator that the host program
calls once, near the start of its entrypoint, to make sure it is the only
running copy of itself.

Run Sequence:
    1. Configuration: setup options merged with environment overrides
    2. Skip override: SKIP_SYS_RUNALONE bypasses everything below
    3. Target discovery: root program file, then the declared module file
    4. Acquisition: non-blocking exclusive flock with optional retries
    5. Termination: continue, or exit with a distinct code

Every collaborator is injectable so that each phase can be tested without
touching the real environment, the process table or the clock.

Typical Usage:
    >>> import runalone
    >>> runalone.lock(retry="3,10")
    >>> # only one copy of this script gets past this point
"""

import logging
import os
from pathlib import Path
from typing import Callable, List, Mapping, Optional

import psutil

from .config.guard_config import GuardConfig, GuardOptions, resolve_config
from .environment import (
    SKIP_VERBOSE,
    InstanceScanner,
    LockTarget,
    acquire_lock,
    is_held,
    locate_lock_target,
    skip_level,
)
from .environment.guards import ModuleIdentity
from .exceptions import ConfigError
from .logger import LogStyle
from .outcome import Outcome
from .paths import LOGGER_NAME, get_program_name
from .policy import TerminationPolicy

logger = logging.getLogger(LOGGER_NAME)


class RunAloneGuard:
    """
    Single-instance guard for one program run.

    Attributes:
        options: Setup-time options as given by the host program.
        program: Explicit root program path, or None for ``__main__``.
        module: Caller-declared module identity used as fallback target.
        program_name: Identity shown in messages (default: ``sys.argv[0]``).
        config: Resolved configuration, set by run().
        target: Locked target after a successful run(), else None.
        outcome: Outcome of the last run(), else None.

    Example:
        >>> guard = RunAloneGuard({"silent": True}, module=__name__)
        >>> guard.run()
        <Outcome.ACQUIRED: 'acquired'>
    """

    def __init__(
        self,
        options: GuardOptions = None,
        *,
        program: Optional[Path] = None,
        module: ModuleIdentity = None,
        program_name: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
        sleeper: Optional[Callable[[float], None]] = None,
        locator: Optional[Callable[..., Optional[LockTarget]]] = None,
        acquirer: Optional[Callable[..., Outcome]] = None,
        scanner_factory: Optional[Callable[[Path], InstanceScanner]] = None,
    ) -> None:
        """
        Args:
            options: Mapping with ``silent``/``retry``, the legacy ``"silent"``
                string, or None.
            program: Root program path (default: ``__main__.__file__``).
            module: Module name, module object or path used as fallback.
            program_name: Program identity for messages.
            environ: Environment for overrides (default: os.environ).
            logger: Diagnostic logger (default: runalone logger).
            sleeper: Sleep function used between retries.
            locator: Target discovery function (default: locate_lock_target).
            acquirer: Lock function (default: acquire_lock).
            scanner_factory: Builds the diagnostic process scanner.
        """
        self.options = options
        self.program = program
        self.module = module
        self.program_name = program_name or get_program_name()
        self.environ = os.environ if environ is None else environ
        self.log = logger or logging.getLogger(LOGGER_NAME)

        self._sleeper = sleeper
        self._locator = locator or locate_lock_target
        self._acquirer = acquirer or acquire_lock
        self._scanner_factory = scanner_factory or InstanceScanner

        self.config: Optional[GuardConfig] = None
        self.target: Optional[LockTarget] = None
        self.outcome: Optional[Outcome] = None

    def resolve_config(self) -> GuardConfig:
        """Resolves the effective configuration without side effects."""
        return resolve_config(self.options, self.environ)

    def _running_instance_notes(self, target: LockTarget) -> List[str]:
        try:
            pids = self._scanner_factory(target.path).detect_pids()
        except psutil.Error as e:
            self.log.debug(f" » Process scan failed: {e}")
            return []
        return [f"{LogStyle.INDENT}{LogStyle.ARROW} Running instance: pid {pid}" for pid in pids]

    def _finish(
        self,
        policy: TerminationPolicy,
        outcome: Outcome,
        detail: Optional[str] = None,
        notes: Optional[List[str]] = None,
    ) -> Outcome:
        self.outcome = outcome
        return policy.resolve(
            outcome, self.program_name, logger=self.log, detail=detail, notes=notes or ()
        )

    def run(self) -> Outcome:
        """
        Executes the guard sequence.

        Returns:
            SKIPPED or ACQUIRED; every other outcome terminates the process.

        Raises:
            SystemExit: With code 1, 2 or 3 as defined by TerminationPolicy.
        """
        try:
            self.config = self.resolve_config()
        except ConfigError as e:
            return self._finish(TerminationPolicy(silent=False), Outcome.CONFIG_ERROR, detail=str(e))

        cfg = self.config
        policy = TerminationPolicy(silent=cfg.silent)

        level = skip_level(self.environ)
        if level:
            if level >= SKIP_VERBOSE and not cfg.silent:
                self.log.warning(f"Skipping runalone check for '{self.program_name}'")
            return self._finish(policy, Outcome.SKIPPED)

        target = self._locator(program=self.program, module=self.module, logger=self.log)
        if target is None:
            return self._finish(policy, Outcome.NO_LOCK_TARGET)

        try:
            outcome = self._acquirer(
                target, cfg.retry, silent=cfg.silent, sleeper=self._sleeper, logger=self.log
            )
        except OSError:
            self._release(target)
            raise

        if outcome is Outcome.ACQUIRED:
            self.target = target
            return self._finish(policy, outcome)

        notes: List[str] = []
        if outcome is Outcome.ALREADY_RUNNING and not cfg.silent:
            notes = self._running_instance_notes(target)
        self._release(target)
        return self._finish(policy, outcome, notes=notes)

    @staticmethod
    def _release(target: LockTarget) -> None:
        # A handle already registered by an earlier run keeps its lock
        if not is_held(target):
            target.close()


def lock(
    legacy: Optional[str] = None,
    *,
    program: Optional[Path] = None,
    module: ModuleIdentity = None,
    environ: Optional[Mapping[str, str]] = None,
    logger: Optional[logging.Logger] = None,
    **options,
) -> Outcome:
    """
    Guards the running program; call once before its main work begins.

    Args:
        legacy: Obsolete single-string form; ``lock("silent")`` equals
            ``lock(silent=True)``.
        program: Root program path (default: ``__main__.__file__``).
        module: Fallback module identity, usually ``__name__``.
        environ: Environment for overrides (default: os.environ).
        logger: Diagnostic logger.
        **options: ``silent`` (bool) and ``retry`` (``"N"`` or ``"N,M"``).

    Returns:
        SKIPPED or ACQUIRED.

    Raises:
        SystemExit: When another copy is running (1), no lock target exists
            (2), or the options are invalid (3).
    """
    if legacy is not None and options:
        resolved_options: GuardOptions = {legacy: True, **options}
    elif legacy is not None:
        resolved_options = legacy
    else:
        resolved_options = options

    guard = RunAloneGuard(
        resolved_options, program=program, module=module, environ=environ, logger=logger
    )
    return guard.run()
