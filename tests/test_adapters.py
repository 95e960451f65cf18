"""
Tests for the shell adapters — CommandExecutor and ServiceController.

Real processes are limited to ``true``, ``false``, ``sh`` and ``sleep``.
"""

from unittest.mock import MagicMock, patch

import pytest

from karei.adapters.shell.command import CommandExecutor, format_command
from karei.adapters.shell.service import ServiceController
from karei.core.errors import EXIT_SYSTEM_ERROR, EXIT_TIMEOUT_ERROR, CommandError


class TestFormatCommand:
    def test_quotes_when_needed(self):
        assert format_command(["echo", "a b"]) == "echo 'a b'"
        assert format_command(["ls", "-la"]) == "ls -la"


class TestDryRun:
    """Dry-run never starts a process."""

    def test_execute_echoes(self, capsys):
        with patch("karei.adapters.shell.command.subprocess.run") as run:
            CommandExecutor(dry_run=True).execute("apt", "install", "git")
        run.assert_not_called()
        assert capsys.readouterr().out == "DRY RUN: apt install git\n"

    def test_sudo_prefix(self, capsys):
        with patch("karei.adapters.shell.command.subprocess.run") as run:
            CommandExecutor(dry_run=True).execute_sudo("ufw", "status")
        run.assert_not_called()
        assert capsys.readouterr().out == "DRY RUN: sudo ufw status\n"

    def test_with_output_returns_empty(self, capsys):
        with patch("karei.adapters.shell.command.subprocess.run") as run:
            result = CommandExecutor(dry_run=True).execute_with_output("git", "--version")
        run.assert_not_called()
        assert result == ""
        assert "DRY RUN: git --version" in capsys.readouterr().out

    def test_silent_prints_nothing(self, capsys):
        with patch("karei.adapters.shell.command.subprocess.run") as run:
            CommandExecutor(dry_run=True).execute_silent("false")
        run.assert_not_called()
        assert capsys.readouterr().out == ""


class TestKeepStdoutClean:
    """JSON mode keeps the executor's own lines off stdout."""

    def test_dry_run_line_on_stderr(self, capsys):
        with patch("karei.adapters.shell.command.subprocess.run") as run:
            CommandExecutor(dry_run=True, keep_stdout_clean=True).execute_sudo("ufw", "status")
        run.assert_not_called()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "DRY RUN: sudo ufw status\n"

    def test_verbose_stream_diverted(self, capfd):
        """Both the announcement and the child's stdout land on stderr."""
        CommandExecutor(verbose=True, keep_stdout_clean=True).execute("sh", "-c", "echo streamed")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "Running: sh -c 'echo streamed'" in captured.err
        assert "streamed\n" in captured.err

    def test_captured_output_unaffected(self):
        executor = CommandExecutor(keep_stdout_clean=True)
        assert executor.execute_with_output("sh", "-c", "echo kept").strip() == "kept"


class TestExecute:
    def test_success(self):
        CommandExecutor().execute("true")

    def test_nonzero_exit(self):
        with pytest.raises(CommandError) as exc:
            CommandExecutor().execute("false")
        assert exc.value.returncode == 1
        assert exc.value.code == EXIT_SYSTEM_ERROR
        assert exc.value.command == ["false"]

    def test_missing_binary(self):
        with pytest.raises(CommandError) as exc:
            CommandExecutor().execute("karei-no-such-binary-xyz")
        assert "command not found" in str(exc.value)
        assert exc.value.returncode is None

    def test_verbose_announces(self, capfd):
        CommandExecutor(verbose=True).execute("sh", "-c", "echo streamed")
        out = capfd.readouterr().out
        assert "Running: sh -c 'echo streamed'" in out
        assert "streamed" in out

    def test_quiet_discards_child_output(self, capfd):
        CommandExecutor().execute("sh", "-c", "echo hidden; echo hidden >&2")
        captured = capfd.readouterr()
        assert "hidden" not in captured.out
        assert "hidden" not in captured.err

    def test_timeout(self):
        with pytest.raises(CommandError) as exc:
            CommandExecutor(timeout=0.2).execute("sleep", "5")
        assert exc.value.code == EXIT_TIMEOUT_ERROR
        assert "timed out" in str(exc.value)


class TestExecuteWithOutput:
    def test_combines_stdout_and_stderr(self):
        out = CommandExecutor().execute_with_output("sh", "-c", "echo out; echo err >&2")
        assert "out" in out
        assert "err" in out

    def test_failure_keeps_output(self):
        with pytest.raises(CommandError) as exc:
            CommandExecutor().execute_with_output("sh", "-c", "echo partial; exit 3")
        assert exc.value.returncode == 3
        assert "partial" in exc.value.output


class TestExecuteSilent:
    def test_success_and_failure(self, capfd):
        executor = CommandExecutor()
        executor.execute_silent("sh", "-c", "echo nope")
        with pytest.raises(CommandError):
            executor.execute_silent("false")
        assert capfd.readouterr().out == ""


class TestCommandExists:
    def test_lookup(self):
        executor = CommandExecutor()
        assert executor.command_exists("sh")
        assert not executor.command_exists("karei-no-such-binary-xyz")


class TestServiceController:
    """systemctl calls are checked against a mock executor."""

    def test_is_active_true(self):
        executor = MagicMock(spec=CommandExecutor)
        assert ServiceController(executor).is_active("fail2ban")
        executor.execute_silent.assert_called_once_with(
            "systemctl", "is-active", "--quiet", "fail2ban"
        )

    def test_is_active_false_on_error(self):
        executor = MagicMock(spec=CommandExecutor)
        executor.execute_silent.side_effect = CommandError(["systemctl"], "inactive")
        assert not ServiceController(executor).is_active("fail2ban")

    def test_enable_and_start_use_sudo(self):
        executor = MagicMock(spec=CommandExecutor)
        services = ServiceController(executor)
        services.enable("ufw")
        services.start("ufw")
        executor.execute_sudo.assert_any_call("systemctl", "enable", "ufw")
        executor.execute_sudo.assert_any_call("systemctl", "start", "ufw")

    def test_status_returns_output(self):
        executor = MagicMock(spec=CommandExecutor)
        executor.execute_with_output.return_value = "active (running)"
        assert ServiceController(executor).status("ufw") == "active (running)"
        executor.execute_with_output.assert_called_once_with("systemctl", "status", "ufw")

    def test_get_property(self):
        executor = MagicMock(spec=CommandExecutor)
        executor.execute_with_output.return_value = "active\n"
        value = ServiceController(executor).get_property("ufw", "ActiveState")
        assert value == "active\n"
        executor.execute_with_output.assert_called_once_with(
            "systemctl", "show", "ufw", "--property=ActiveState", "--value"
        )

    def test_dry_run_executor_reports_active(self):
        assert ServiceController(CommandExecutor(dry_run=True)).is_active("anything")
