"""Tests for the terminator."""

from unittest.mock import MagicMock, patch

import psutil
import pytest

from fuzzkill.terminator import EXIT_FAILED, EXIT_OK, kill


def make_handle(pid: int) -> MagicMock:
    handle = MagicMock(spec=psutil.Process)
    handle.pid = pid
    return handle


@pytest.fixture
def quiet_console():
    """Silence console output and expose the helpers for assertions."""
    with patch("fuzzkill.terminator.console") as mock_console:
        yield mock_console


class TestKill:
    """Tests for kill()."""

    def test_empty_selection(self, quiet_console) -> None:
        with patch("fuzzkill.terminator.psutil.wait_procs") as mock_wait:
            assert kill([]) == EXIT_OK
        mock_wait.assert_not_called()
        quiet_console.selection_cancelled.assert_called_once()

    def test_kills_and_waits(self, make_record, quiet_console) -> None:
        handles = [make_handle(10), make_handle(11)]
        records = [make_record(id=10, handle=handles[0]), make_record(id=11, handle=handles[1])]

        with patch(
            "fuzzkill.terminator.psutil.wait_procs", return_value=(handles, [])
        ) as mock_wait:
            assert kill(records, wait_timeout=1.5) == EXIT_OK

        for handle in handles:
            handle.kill.assert_called_once()
            handle.terminate.assert_not_called()
        assert mock_wait.call_args.kwargs["timeout"] == 1.5
        assert quiet_console.process_killed.call_count == 2
        quiet_console.kill_summary.assert_called_once_with(2, 0)

    def test_graceful_uses_terminate(self, make_record, quiet_console) -> None:
        handle = make_handle(10)
        with patch("fuzzkill.terminator.psutil.wait_procs", return_value=([handle], [])):
            assert kill([make_record(id=10, handle=handle)], graceful=True) == EXIT_OK
        handle.terminate.assert_called_once()
        handle.kill.assert_not_called()

    def test_already_gone_is_not_failure(self, make_record, quiet_console) -> None:
        handle = make_handle(10)
        handle.kill.side_effect = psutil.NoSuchProcess(pid=10)
        with patch("fuzzkill.terminator.psutil.wait_procs") as mock_wait:
            assert kill([make_record(id=10, handle=handle)]) == EXIT_OK
        mock_wait.assert_not_called()
        quiet_console.process_already_gone.assert_called_once()

    def test_access_denied_fails(self, make_record, quiet_console) -> None:
        denied = make_handle(4)
        denied.kill.side_effect = psutil.AccessDenied(pid=4)
        ok = make_handle(10)
        records = [make_record(id=4, handle=denied), make_record(id=10, handle=ok)]

        with patch("fuzzkill.terminator.psutil.wait_procs", return_value=([ok], [])):
            assert kill(records) == EXIT_FAILED

        ok.kill.assert_called_once()
        quiet_console.kill_failed.assert_called_once()
        quiet_console.kill_summary.assert_called_once_with(1, 1)

    def test_survivor_fails(self, make_record, quiet_console) -> None:
        handle = make_handle(10)
        with patch("fuzzkill.terminator.psutil.wait_procs", return_value=([], [handle])):
            assert kill([make_record(id=10, handle=handle)]) == EXIT_FAILED
        quiet_console.kill_failed.assert_called_once()

    def test_unknown_pid_fails(self, make_record, quiet_console) -> None:
        with patch("fuzzkill.terminator.psutil.wait_procs") as mock_wait:
            assert kill([make_record(id=-1, name="ghost")]) == EXIT_FAILED
        mock_wait.assert_not_called()

    def test_opens_process_without_handle(self, make_record, quiet_console) -> None:
        """Records built without a handle are looked up by pid."""
        handle = make_handle(77)
        with (
            patch("fuzzkill.terminator.psutil.Process", return_value=handle) as mock_process,
            patch("fuzzkill.terminator.psutil.wait_procs", return_value=([handle], [])),
        ):
            assert kill([make_record(id=77)]) == EXIT_OK
        mock_process.assert_called_once_with(77)
        handle.kill.assert_called_once()
