"""
Command-Line Wrapper.

Runs an arbitrary command under the instance guard, which is handy for
crontab entries of programs that cannot import runalone themselves:

    */5 * * * * runalone --retry 3,20 -- /opt/jobs/sync.sh --full

The lock target is the command's own executable (resolved through PATH), or
an existing file given with ``--lock-file``. The lock is held while the
command runs and the wrapper exits with the command's return code.
"""

import argparse
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logger import Logger
from .orchestrator import RunAloneGuard
from .paths import LOGGER_NAME

# Shell convention for "command not found / not executable"
EXIT_COMMAND_FAILED = 127


# ARGUMENT PARSING
def build_parser() -> argparse.ArgumentParser:
    """Builds the ``runalone`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="runalone",
        description="Run a command unless another copy of it is already running.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    guard_group = parser.add_argument_group("Guard")

    guard_group.add_argument(
        "--silent",
        action="store_true",
        default=None,
        help="Do not report that another copy is running (SILENT_SYS_RUNALONE wins)",
    )
    guard_group.add_argument(
        "--retry",
        type=str,
        default=None,
        metavar="N[,M]",
        help="Retry N times, M seconds apart (RETRY_SYS_RUNALONE wins)",
    )
    guard_group.add_argument(
        "--lock-file",
        type=Path,
        default=None,
        dest="lock_file",
        help="Existing file to lock instead of the command's executable",
    )
    guard_group.add_argument(
        "--debug",
        action="store_true",
        help="Log lock target discovery and retry details",
    )

    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run, optionally preceded by --",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses wrapper arguments.

    Returns:
        Namespace whose ``command`` has any leading ``--`` removed.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command and args.command[0] == "--":
        args.command = args.command[1:]
    if not args.command:
        parser.error("a command to run is required")

    return args


def resolve_command_path(command: str) -> Path:
    """Executable path for ``command``; unresolved names are returned as-is."""
    found = shutil.which(command)
    return Path(found) if found else Path(command)


def guard_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Setup-time options given on the command line."""
    options: Dict[str, Any] = {}
    if args.silent:
        options["silent"] = True
    if args.retry is not None:
        options["retry"] = args.retry
    return options


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``runalone`` console script.

    Returns:
        Exit code of the wrapped command, or EXIT_COMMAND_FAILED if it could
        not be started. Guard failures exit from within the guard.
    """
    args = parse_args(argv)
    log = Logger.setup(name=LOGGER_NAME, level="DEBUG" if args.debug else "INFO")

    program = args.lock_file or resolve_command_path(args.command[0])
    guard = RunAloneGuard(
        guard_options(args),
        program=program,
        program_name=args.command[0],
        logger=log,
    )
    guard.run()

    try:
        completed = subprocess.run(args.command, check=False)
    except OSError as e:
        log.error(f"Cannot run '{args.command[0]}': {e}")
        return EXIT_COMMAND_FAILED

    log.debug(f" » '{args.command[0]}' exited with {completed.returncode}")
    return completed.returncode


if __name__ == "__main__":
    sys.exit(main())
