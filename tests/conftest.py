"""
Pytest Configuration and Shared Fixtures for the runalone Test Suite.

Provides:
- Throwaway program files to use as lock targets
- A contender fixture holding a real flock on such a file
- Isolation of the process-wide held-lock registry
- Environments stripped of the runalone override variables
"""

# Standard Imports
import fcntl
import os
from unittest.mock import MagicMock

# Third-Party Imports
import pytest

# Internal Imports
from runalone.core.environment import guards
from runalone.core.paths import ENV_RETRY, ENV_SILENT, ENV_SKIP


# LOCK REGISTRY ISOLATION
@pytest.fixture(autouse=True)
def isolated_lock_registry(monkeypatch):
    """Gives each test its own held-lock registry and closes what it acquired."""
    registry = []
    monkeypatch.setattr(guards, "_held_locks", registry)
    yield registry
    for target in registry:
        target.close()


# ENVIRONMENT FIXTURES
@pytest.fixture
def clean_environ():
    """Copy of os.environ without any runalone override variables."""
    env = dict(os.environ)
    for name in (ENV_SILENT, ENV_RETRY, ENV_SKIP):
        env.pop(name, None)
    return env


# LOCK TARGET FIXTURES
@pytest.fixture
def script_file(tmp_path):
    """A small program file acting as the root lock target."""
    path = tmp_path / "nightly_job.py"
    path.write_text("print('working')\n")
    return path


@pytest.fixture
def contender(script_file):
    """Holds an exclusive flock on script_file through a separate handle."""
    handle = open(script_file, "rb")
    fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    yield handle
    handle.close()


@pytest.fixture
def mock_logger():
    """Logger double for asserting emitted diagnostics."""
    return MagicMock()
