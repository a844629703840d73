"""
Running Instance Detection.

Best-effort lookup of the processes that are executing the same program as
a contended guard, so the operator sees which PID is in the way. The lock
itself is the only source of truth: this scan never changes an outcome.
"""

# =========================================================================== #
#                                Standard Imports                             #
# =========================================================================== #
import os
from pathlib import Path
from typing import List, Optional, Union

# =========================================================================== #
#                                Third-Party Imports                          #
# =========================================================================== #
import psutil


class InstanceScanner:
    """
    Scans the process table for other invocations of a program file.

    Attributes:
        target_path (str): Resolved path of the program file to match.
        current_pid (int): PID excluded from results (this process).
    """
    def __init__(self, target_path: Union[str, Path], current_pid: Optional[int] = None):
        self.target_path = os.path.realpath(target_path)
        self.current_pid = current_pid if current_pid is not None else os.getpid()

    def detect_instances(self) -> List[psutil.Process]:
        """
        Finds processes whose command line references the target file.

        Matches both interpreted (``python job.py``) and directly executed
        (``./job.py``) invocations.

        Returns:
            List of psutil.Process instances, excluding the current process.
        """
        instances = []

        for proc in psutil.process_iter(["pid", "cmdline"]):
            try:
                info = proc.info
                if not info["cmdline"] or info["pid"] == self.current_pid:
                    continue

                cmdline_paths = [os.path.realpath(arg) for arg in info["cmdline"]]
                if self.target_path in cmdline_paths:
                    instances.append(proc)

            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue

        return instances

    def detect_pids(self) -> List[int]:
        """PIDs of detect_instances(), sorted."""
        return sorted(proc.pid for proc in self.detect_instances())
