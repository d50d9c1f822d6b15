"""Shared fixtures: sessions rooted in a temp dir and a scripted executor."""

from typing import List

import pytest

from shellbridge.executor import ExecutionResult, ResolvedInvocation
from shellbridge.handlers import HandlerContext
from shellbridge.host import Platform
from shellbridge.session import Session


class FakeExecutor:
    """Records every invocation and replays queued results (default: ok, no output)."""

    def __init__(self, *results: ExecutionResult):
        self.results: List[ExecutionResult] = list(results)
        self.invocations: List[ResolvedInvocation] = []

    @property
    def spawn_count(self) -> int:
        return len(self.invocations)

    @property
    def argvs(self) -> List[List[str]]:
        return [list(inv.argv) for inv in self.invocations]

    def queue(self, output: str = "", exit_code: int = 0) -> "FakeExecutor":
        self.results.append(ExecutionResult(output, exit_code))
        return self

    def run(self, invocation: ResolvedInvocation) -> ExecutionResult:
        self.invocations.append(invocation)
        if self.results:
            return self.results.pop(0)
        return ExecutionResult("", 0)


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def workdir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def posix_session(workdir, home):
    return Session.start(Platform.POSIX, home=str(home), cwd=str(workdir))


@pytest.fixture
def windows_session(workdir, home):
    return Session.start(Platform.WINDOWS, home=str(home), cwd=str(workdir))


@pytest.fixture
def posix_ctx(posix_session, executor):
    return HandlerContext(posix_session, executor)


@pytest.fixture
def windows_ctx(windows_session, executor):
    return HandlerContext(windows_session, executor)
