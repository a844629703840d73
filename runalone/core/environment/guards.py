"""
Lock Target Discovery & Advisory Locking.

The mutex for a run is the program's own source file: every invocation of
the same script opens the same inode, so an exclusive ``flock`` on it
guarantees that at most one invocation proceeds. Nothing is created or
written on disk.

Discovery order:
    1. Root program: the explicit ``program`` path, or ``__main__.__file__``
    2. Module fallback: the file of the module the caller declares
    3. Neither usable -> no lock target

Once acquired, the handle is kept in a module-level registry so the lock
lives exactly as long as the process (or until the file is replaced, which
silently detaches new contenders from the held lock). Later guard runs in
the same process reuse the registered handle instead of opening a new one.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import logging
import sys
import time
import types
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Callable, List, Literal, Optional, Tuple, Union

# Tentative import for Unix-specific file locking
try:
    import fcntl
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False

# =========================================================================== #
#                               Internal Imports                              #
# =========================================================================== #
from ..config.retry_config import RetrySchedule
from ..outcome import Outcome
from ..paths import LOGGER_NAME

TargetScope = Literal["root", "module"]
ModuleIdentity = Union[str, Path, types.ModuleType, None]

# =========================================================================== #
#                               Global State                                  #
# =========================================================================== #
# Persistent handles to prevent garbage collection from releasing locks
_held_locks: List["LockTarget"] = []


# =========================================================================== #
#                                 Lock Target                                 #
# =========================================================================== #

@dataclass(frozen=True)
class LockTarget:
    """
    An open, read-only handle on the file used as this run's mutex.

    Attributes:
        identifier: ``__main__`` for the root program, otherwise the module
            name (or path) the caller declared.
        path: Filesystem location of the locked file.
        scope: ``root`` or ``module``.
        handle: Open binary handle carrying the advisory lock.
    """
    identifier: str
    path: Path
    scope: TargetScope
    handle: IO[bytes] = field(repr=False, compare=False)

    def fileno(self) -> int:
        return self.handle.fileno()

    def close(self) -> None:
        self.handle.close()


def held_locks() -> Tuple[LockTarget, ...]:
    """Targets locked by this process so far."""
    return tuple(_held_locks)


def find_held_lock(path: Path) -> Optional[LockTarget]:
    """
    Returns the target this process already locked on ``path``, if any.

    A flock belongs to the open file description, so a second handle on the
    same file would contend with the one this process already holds.
    """
    wanted = Path(path).resolve()
    for held in _held_locks:
        if not held.handle.closed and held.path.resolve() == wanted:
            return held
    return None


def is_held(target: LockTarget) -> bool:
    return any(held is target for held in _held_locks)


# =========================================================================== #
#                               Target Discovery                              #
# =========================================================================== #

def resolve_root_program(main_module: Optional[types.ModuleType] = None) -> Optional[Path]:
    """
    Returns the file of the top-level program unit.

    Interactive sessions and ``python -c`` have no ``__main__.__file__``.
    """
    main = sys.modules.get("__main__") if main_module is None else main_module
    path = getattr(main, "__file__", None)
    return Path(path) if path else None


def resolve_module_file(module: ModuleIdentity) -> Optional[Path]:
    """
    Resolves the caller-declared module identity to its source file.

    Args:
        module: An already imported module name, a module object, or a path.

    Returns:
        Path of the module's file, or None when it has none.

    Raises:
        TypeError: For unsupported identity types.
    """
    if module is None:
        return None
    if isinstance(module, Path):
        return module
    if isinstance(module, str):
        module = sys.modules.get(module)
        if module is None:
            return None
    if not isinstance(module, types.ModuleType):
        raise TypeError(f"Unsupported module identity: {type(module).__name__}")

    path = getattr(module, "__file__", None)
    return Path(path) if path else None


def _module_identifier(module: ModuleIdentity) -> str:
    if isinstance(module, types.ModuleType):
        return module.__name__
    return str(module)


def _open_target(path: Path, log: logging.Logger) -> Optional[IO[bytes]]:
    """Opens ``path`` read-only if it is a regular, seekable file."""
    if not path.is_file():
        log.debug(f" » Lock candidate {path} is not a regular file")
        return None

    try:
        handle = open(path, "rb")
    except OSError as e:
        log.debug(f" » Lock candidate {path} cannot be opened: {e}")
        return None

    if not handle.seekable():
        handle.close()
        log.debug(f" » Lock candidate {path} is not seekable")
        return None

    return handle


def locate_lock_target(
    program: Optional[Path] = None,
    module: ModuleIdentity = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[LockTarget]:
    """
    Selects the single resource to lock for this run.

    The root program is always preferred; the module file is only consulted
    when the root program has no usable file, which is the case for library
    code invoked from an interactive session, a zipapp or ``python -c``.

    Args:
        program: Explicit root program path (default: ``__main__.__file__``).
        module: Caller-declared module identity used as fallback.
        logger: Logger for discovery details.

    A candidate this process has already locked is returned as is, so a
    repeated guard run in the same process never contends with itself.

    Returns:
        The opened LockTarget, or None when no candidate is usable.
    """
    log = logger or logging.getLogger(LOGGER_NAME)

    root_path = program if program is not None else resolve_root_program()
    candidates = (
        ("root", "__main__", root_path),
        ("module", _module_identifier(module), resolve_module_file(module)),
    )

    for scope, identifier, path in candidates:
        if path is None:
            continue
        held = find_held_lock(Path(path))
        if held is not None:
            log.debug(f" » Lock target: {path} (already held)")
            return held
        handle = _open_target(Path(path), log)
        if handle is not None:
            log.debug(f" » Lock target: {path} ({scope})")
            return LockTarget(identifier=identifier, path=Path(path), scope=scope, handle=handle)

    return None


# =========================================================================== #
#                                Lock Acquisition                             #
# =========================================================================== #

def try_lock(target: LockTarget) -> bool:
    """
    Single non-blocking exclusive lock attempt.

    Returns:
        True if the lock was taken, False if another process holds it.

    Raises:
        OSError: For failures other than contention (e.g. ENOLCK).
    """
    try:
        fcntl.flock(target.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except BlockingIOError:
        return False
    return True


def acquire_lock(
    target: LockTarget,
    retry: Optional[RetrySchedule] = None,
    *,
    silent: bool = False,
    sleeper: Optional[Callable[[float], None]] = None,
    logger: Optional[logging.Logger] = None,
) -> Outcome:
    """
    Takes the exclusive advisory lock on ``target``, polling if configured.

    With a schedule of ``times=N, interval=S`` the attempt is repeated up to
    N more times, sleeping S seconds before each one. The first success ends
    the loop.

    Args:
        target: Located lock target.
        retry: Optional retry schedule.
        silent: Suppress the retry progress messages.
        sleeper: Sleep function (default: time.sleep).
        logger: Diagnostic logger.

    Returns:
        ACQUIRED, ALREADY_RUNNING, or SKIPPED when the platform has no flock.
    """
    log = logger or logging.getLogger(LOGGER_NAME)
    sleep = sleeper or time.sleep

    if not HAS_FCNTL:
        log.warning(f"{sys.platform} has no advisory file locking; running unguarded")
        return Outcome.SKIPPED

    if is_held(target):
        return Outcome.ACQUIRED

    if try_lock(target):
        _held_locks.append(target)
        return Outcome.ACQUIRED

    if retry is None or not retry.enabled:
        return Outcome.ALREADY_RUNNING

    if not silent:
        log.warning("Retrying lock attempt ...")

    for attempt in range(1, retry.times + 1):
        sleep(retry.interval)
        if try_lock(target):
            log.debug(f" » Lock acquired on attempt {attempt}/{retry.times}")
            _held_locks.append(target)
            return Outcome.ACQUIRED

    if not silent:
        log.warning("Retrying lock failed ...")

    return Outcome.ALREADY_RUNNING
