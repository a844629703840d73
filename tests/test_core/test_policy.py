"""
Test Suite for TerminationPolicy.

Tests exit codes per outcome and which messages the silent flag suppresses.
"""

import pytest

from runalone.core.outcome import Outcome
from runalone.core.policy import TerminationPolicy


@pytest.mark.unit
@pytest.mark.parametrize("outcome", [Outcome.SKIPPED, Outcome.ACQUIRED])
def test_proceeding_outcomes_return(outcome, mock_logger):
    """Test skipped and acquired runs continue without error output."""
    result = TerminationPolicy().resolve(outcome, "job.py", logger=mock_logger)

    assert result is outcome
    mock_logger.error.assert_not_called()


@pytest.mark.unit
def test_already_running_exits_one(mock_logger):
    with pytest.raises(SystemExit) as exc_info:
        TerminationPolicy().resolve(Outcome.ALREADY_RUNNING, "job.py", logger=mock_logger)

    assert exc_info.value.code == 1
    mock_logger.error.assert_called_once_with("A copy of 'job.py' is already running")


@pytest.mark.unit
def test_already_running_notes_follow_message(mock_logger):
    with pytest.raises(SystemExit):
        TerminationPolicy().resolve(
            Outcome.ALREADY_RUNNING, "job.py", logger=mock_logger, notes=["  » Running instance: pid 42"]
        )

    mock_logger.info.assert_called_once_with("  » Running instance: pid 42")


@pytest.mark.unit
def test_already_running_silent(mock_logger):
    """Test silent suppresses the contention message but not the exit code."""
    with pytest.raises(SystemExit) as exc_info:
        TerminationPolicy(silent=True).resolve(
            Outcome.ALREADY_RUNNING, "job.py", logger=mock_logger, notes=["note"]
        )

    assert exc_info.value.code == 1
    mock_logger.error.assert_not_called()
    mock_logger.info.assert_not_called()


@pytest.mark.unit
@pytest.mark.parametrize("silent", [False, True])
def test_no_lock_target_exits_two_and_is_never_silenced(silent, mock_logger):
    with pytest.raises(SystemExit) as exc_info:
        TerminationPolicy(silent=silent).resolve(Outcome.NO_LOCK_TARGET, "job.py", logger=mock_logger)

    assert exc_info.value.code == 2
    message = mock_logger.error.call_args[0][0]
    assert message.startswith("Add a lock-target convention to 'job.py'")


@pytest.mark.unit
@pytest.mark.parametrize("silent", [False, True])
def test_config_error_exits_three_with_detail(silent, mock_logger):
    with pytest.raises(SystemExit) as exc_info:
        TerminationPolicy(silent=silent).resolve(
            Outcome.CONFIG_ERROR, "job.py", logger=mock_logger, detail="Don't know what to do with: wait"
        )

    assert exc_info.value.code == 3
    mock_logger.error.assert_called_once_with("Don't know what to do with: wait")


@pytest.mark.unit
def test_exit_code_table():
    policy = TerminationPolicy()

    assert policy.exit_code(Outcome.ACQUIRED) is None
    assert policy.exit_code(Outcome.SKIPPED) is None
    assert policy.exit_code(Outcome.ALREADY_RUNNING) == 1
    assert policy.exit_code(Outcome.NO_LOCK_TARGET) == 2
    assert policy.exit_code(Outcome.CONFIG_ERROR) == 3


@pytest.mark.unit
def test_outcome_proceeds():
    assert [o for o in Outcome if o.proceeds] == [Outcome.SKIPPED, Outcome.ACQUIRED]
