"""
Tests for CommandRunner and RunResult formatting.
"""

import signal
import subprocess
import pytest
from unittest.mock import MagicMock, patch

from paneshell.command_runner import CommandRunner, RunResult, describe_returncode


def completed(returncode=0, stdout=b""):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    return result


class TestCommandRunner:

    def setup_method(self):
        self.runner = CommandRunner()

    def test_empty_argv_is_a_no_op(self):
        with patch('paneshell.command_runner.subprocess.run') as mock_run:
            assert self.runner.run([]) is None
            assert self.runner.run(()) is None
        mock_run.assert_not_called()

    def test_runs_without_shell_with_merged_output(self):
        with patch('paneshell.command_runner.subprocess.run',
                   return_value=completed(0, b"hey\n")) as mock_run:
            result = self.runner.run(["echo", "hey"])

        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == ("echo", "hey")
        assert kwargs['stdout'] == subprocess.PIPE
        assert kwargs['stderr'] == subprocess.STDOUT
        assert kwargs['stdin'] == subprocess.DEVNULL
        assert 'shell' not in kwargs
        assert result.success
        assert result.output == "hey\n"
        assert result.returncode == 0

    def test_non_zero_exit_reports_exit_status(self):
        with patch('paneshell.command_runner.subprocess.run',
                   return_value=completed(2, b"boom\n")):
            result = self.runner.run(["false"])

        assert not result.success
        assert result.error == "exit status 2"
        assert result.returncode == 2

    def test_spawn_failure_reports_exec_error(self):
        error = FileNotFoundError(2, "No such file or directory")
        with patch('paneshell.command_runner.subprocess.run', side_effect=error):
            result = self.runner.run(["no-such-binary", "--flag"])

        assert result.error == 'exec: "no-such-binary": No such file or directory'
        assert result.returncode is None

    def test_invalid_argv_reports_exec_error(self):
        error = ValueError("embedded null byte")
        with patch('paneshell.command_runner.subprocess.run', side_effect=error):
            result = self.runner.run(["echo", "a\x00b"])

        assert result.error == 'exec: "echo": embedded null byte'
        assert result.returncode is None

    def test_undecodable_output_is_replaced(self):
        with patch('paneshell.command_runner.subprocess.run',
                   return_value=completed(0, b"ok \xff\n")):
            result = self.runner.run(["cat", "binary"])

        assert result.output == "ok �\n"

    def test_cwd_is_passed_through(self):
        runner = CommandRunner(cwd="/tmp")
        with patch('paneshell.command_runner.subprocess.run',
                   return_value=completed()) as mock_run:
            runner.run(["pwd"])

        assert mock_run.call_args.kwargs['cwd'] == "/tmp"


class TestRunResult:

    def test_success_entry(self):
        result = RunResult(argv=("echo", "hey"), output="hey\n", returncode=0)
        assert result.format_log_entry() == "Running command: echo hey\nhey\n"

    def test_error_entry_drops_output(self):
        result = RunResult(argv=("false",), output="ignored", error="exit status 1", returncode=1)
        assert result.format_log_entry() == "Running command: false\nError: exit status 1\n"


class TestDescribeReturncode:

    def test_exit_status(self):
        assert describe_returncode(1) == "exit status 1"

    def test_signal_by_name(self):
        assert describe_returncode(-signal.SIGKILL) == "signal: SIGKILL"

    def test_unknown_signal_number(self):
        assert describe_returncode(-999) == "signal: 999"
