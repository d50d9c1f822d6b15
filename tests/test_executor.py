"""Tests for the process executor, using the running interpreter as the child."""

import sys

import pytest

from shellbridge.errors import CommandFailedError, CommandTimeoutError
from shellbridge.executor import (
    ProcessExecutor,
    ResolvedInvocation,
    cmd_argv,
    powershell_argv,
    ps_quote,
)


def _python(code, cwd):
    return ResolvedInvocation([sys.executable, "-c", code], str(cwd))


class TestProcessExecutor:
    """Tests for ProcessExecutor.run()."""

    def test_merges_stdout_and_stderr(self, tmp_path):
        """Test both streams land in one output string."""
        code = "import sys; sys.stdout.write('out\\n'); sys.stdout.flush(); sys.stderr.write('err\\n')"
        result = ProcessExecutor().run(_python(code, tmp_path))
        assert "out" in result.output
        assert "err" in result.output
        assert result.ok

    def test_non_zero_exit_is_returned(self, tmp_path):
        """Test a failing child is a result, not an exception."""
        result = ProcessExecutor().run(_python("import sys; sys.exit(3)", tmp_path))
        assert result.exit_code == 3
        assert not result.ok

    def test_runs_in_working_directory(self, tmp_path):
        result = ProcessExecutor().run(_python("import os; print(os.getcwd())", tmp_path))
        assert result.output.strip() == str(tmp_path) or tmp_path.samefile(result.output.strip())

    def test_stdin_is_closed(self, tmp_path):
        """Test a child reading stdin sees EOF instead of blocking."""
        result = ProcessExecutor(timeout_s=10).run(_python("import sys; print(repr(sys.stdin.read()))", tmp_path))
        assert result.output.strip() == "''"

    def test_missing_program(self, tmp_path):
        executor = ProcessExecutor()
        with pytest.raises(CommandFailedError, match="Cannot run"):
            executor.run(ResolvedInvocation(["definitely-not-a-real-program-xyz"], str(tmp_path)))
        assert executor.spawn_count == 0

    def test_timeout_kills_child(self, tmp_path):
        executor = ProcessExecutor(timeout_s=0.5)
        with pytest.raises(CommandTimeoutError):
            executor.run(_python("import time; time.sleep(30)", tmp_path))
        assert executor.spawn_count == 1

    def test_spawn_count(self, tmp_path):
        executor = ProcessExecutor()
        executor.run(_python("pass", tmp_path))
        executor.run(_python("pass", tmp_path))
        assert executor.spawn_count == 2


class TestArgvBuilders:
    """Tests for the native argv helpers."""

    def test_cmd_argv(self):
        assert cmd_argv("dir", "/s/b") == ["cmd.exe", "/c", "dir", "/s/b"]

    def test_powershell_argv(self):
        argv = powershell_argv("Get-Date")
        assert argv[0] == "powershell"
        assert argv[-2:] == ["-Command", "Get-Date"]

    def test_ps_quote_escapes(self):
        assert ps_quote("it's") == "'it''s'"

    def test_invocation_program(self):
        inv = ResolvedInvocation(["ls", "-l"], "/tmp")
        assert inv.program == "ls"
        assert inv.display() == "ls -l"
