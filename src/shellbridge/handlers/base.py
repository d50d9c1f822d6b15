"""Shared plumbing for dedicated command handlers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Type

from ..errors import (
    CommandFailedError,
    MissingArgumentError,
    MissingFileError,
    ShellError,
    TooManyArgumentsError,
)
from ..executor import ExecutionResult, ProcessExecutor, ResolvedInvocation
from ..host import Platform
from ..paths import tokenize
from ..session import Session


@dataclass(frozen=True)
class SpecialResult:
    """Text produced by a dedicated handler.

    ``classify`` is False for messages that should be shown as plain output
    rather than labelled line by line.
    """
    message: str
    classify: bool = True


@dataclass
class HandlerContext:
    session: Session
    executor: ProcessExecutor

    @property
    def platform(self) -> Platform:
        return self.session.platform

    @property
    def cwd(self) -> str:
        return self.session.current_directory

    def resolve(self, path: str) -> str:
        return self.session.resolve(path)

    def existing(self, path: str, error: Type[ShellError] = MissingFileError, label: str = "File not found") -> str:
        """Resolve ``path`` and fail before any spawn if it does not exist."""
        resolved = self.resolve(path)
        if not os.path.exists(resolved):
            raise error(f"{label}: {path}")
        return resolved

    def run(self, argv: Sequence[str]) -> ExecutionResult:
        return self.executor.run(ResolvedInvocation(list(argv), self.cwd))

    def run_checked(
        self,
        argv: Sequence[str],
        failure: str,
        error: Type[ShellError] = CommandFailedError,
    ) -> str:
        """Run ``argv`` and raise ``error`` carrying its output on non-zero exit."""
        result = self.run(argv)
        if not result.ok:
            raise error(failure, result.output)
        return result.output


Handler = Callable[[HandlerContext, str], SpecialResult]


@dataclass(frozen=True)
class PlatformPair:
    """The POSIX and Windows builders for one command.

    ``None`` on a side means that platform uses the generic passthrough.
    """
    posix: Optional[Handler]
    windows: Optional[Handler]

    def for_platform(self, platform: Platform) -> Optional[Handler]:
        if platform is Platform.WINDOWS:
            return self.windows
        return self.posix


def both(handler: Handler) -> PlatformPair:
    return PlatformPair(handler, handler)


def require_tokens(raw: str, command: str, what: str, count: int) -> List[str]:
    """Tokenize ``raw`` and insist on exactly ``count`` tokens."""
    tokens = tokenize(raw)
    if len(tokens) < count:
        if not tokens:
            raise MissingArgumentError(f"{command} requires {what}")
        raise MissingArgumentError(f"{command} requires both {what}")
    if len(tokens) > count:
        raise TooManyArgumentsError(f"{command} takes {what}, got {len(tokens)} arguments")
    return tokens
