"""Blocking process execution with merged output."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from .errors import CommandFailedError, CommandTimeoutError


@dataclass(frozen=True)
class ResolvedInvocation:
    """A concrete, platform-specific process to launch."""
    argv: Sequence[str]
    working_directory: str

    @property
    def program(self) -> str:
        return self.argv[0]

    def display(self) -> str:
        return subprocess.list2cmdline(list(self.argv))


@dataclass(frozen=True)
class ExecutionResult:
    output: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def powershell_argv(script: str) -> list[str]:
    return ["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command", script]


def cmd_argv(*args: str) -> list[str]:
    return ["cmd.exe", "/c", *args]


def ps_quote(value: str) -> str:
    """Single-quote a value for a PowerShell script."""
    return "'" + value.replace("'", "''") + "'"


class ProcessExecutor:
    """Runs one child process at a time and hands back its combined output.

    A non-zero exit code is returned, not raised; each handler decides what
    it means. Children get no stdin, so prompts see EOF rather than waiting.
    ``timeout_s`` of ``None`` waits for the child indefinitely.
    """

    def __init__(self, timeout_s: Optional[float] = None) -> None:
        self.timeout_s = timeout_s
        self.spawn_count = 0

    def run(self, invocation: ResolvedInvocation) -> ExecutionResult:
        logger.debug("exec.spawn cwd={} argv={}", invocation.working_directory, invocation.display())
        try:
            proc = subprocess.Popen(
                list(invocation.argv),
                cwd=invocation.working_directory,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise CommandFailedError(f"Cannot run {invocation.program}: {e.strerror or e}")

        self.spawn_count += 1
        with proc:
            try:
                output, _ = proc.communicate(timeout=self.timeout_s)
            except subprocess.TimeoutExpired:
                proc.kill()
                output, _ = proc.communicate()
                raise CommandTimeoutError(
                    f"{invocation.program} timed out after {self.timeout_s}s",
                    output,
                )
            code = proc.returncode

        logger.debug("exec.exit program={} code={}", invocation.program, code)
        return ExecutionResult(output or "", code)
