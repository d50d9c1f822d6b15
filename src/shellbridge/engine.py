"""The single entry point the front end talks to.

``ShellEngine.submit`` takes a command name and its raw argument text and
always comes back with something displayable: failures are turned into an
``Error:`` reply rather than raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from .classifier import ClassifiedLine, LineCategory, classify
from .commands import CommandKind, CommandRequest, usage
from .config import Settings
from .errors import CommandFailedError, ShellError, UnknownCommandError
from .executor import ProcessExecutor, ResolvedInvocation
from .host import detect_platform
from .mapper import CommandMapper
from .session import Session


@dataclass
class Reply:
    """What the front end shows for one submitted command."""
    command_line: str
    text: str
    category: LineCategory = LineCategory.OUTPUT
    lines: List[ClassifiedLine] = field(default_factory=list)
    clear_screen: bool = False

    @property
    def ok(self) -> bool:
        return self.category is not LineCategory.ERROR

    @classmethod
    def plain(cls, command_line: str, text: str) -> "Reply":
        lines = [ClassifiedLine(line, LineCategory.OUTPUT) for line in text.splitlines()]
        return cls(command_line, text, LineCategory.OUTPUT, lines)

    @classmethod
    def classified(cls, command_line: str, text: str) -> "Reply":
        return cls(command_line, text, LineCategory.OUTPUT, classify(text))

    @classmethod
    def error(cls, command_line: str, err: Exception) -> "Reply":
        text = f"Error: {err}"
        return cls(command_line, text, LineCategory.ERROR, [ClassifiedLine(text, LineCategory.ERROR)])


class ShellEngine:
    """Command translation and execution for one session."""

    def __init__(
        self,
        session: Session,
        executor: Optional[ProcessExecutor] = None,
        mapper: Optional[CommandMapper] = None,
    ) -> None:
        self.session = session
        self.executor = executor or ProcessExecutor()
        self.mapper = mapper or CommandMapper(session.platform, self.executor)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShellEngine":
        session = Session.start(detect_platform(settings.platform))
        return cls(session, ProcessExecutor(timeout_s=settings.timeout_s))

    # --- boundary ---

    def submit(self, command: str, raw_arguments: str = "") -> Reply:
        request = CommandRequest(command.strip(), raw_arguments.strip())
        command_line = "$ " + " ".join(p for p in (request.name, request.raw_arguments) if p)

        try:
            kind = CommandKind.parse(request.name)
        except UnknownCommandError as e:
            return Reply.error(command_line, e)

        self.session.record(kind.value, request.raw_arguments)
        try:
            return self._dispatch(kind, request.raw_arguments, command_line)
        except ShellError as e:
            logger.info("submit.failed command={} error={}", kind.value, e.message)
            return Reply.error(command_line, e)
        except Exception as e:
            logger.exception("submit.unexpected command={}", kind.value)
            return Reply.error(command_line, e)

    def submit_line(self, line: str) -> Reply:
        """Submit ``name args...`` typed as a single line."""
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return Reply.plain("$", "")
        return self.submit(parts[0], parts[1] if len(parts) > 1 else "")

    def current_working_directory(self) -> str:
        return self.session.current_directory

    def history_entries(self) -> List[str]:
        return self.session.history_entries()

    # --- dispatch ---

    def _dispatch(self, kind: CommandKind, raw: str, command_line: str) -> Reply:
        if kind is CommandKind.CD:
            target = self.session.change_directory(raw.replace('"', ""))
            return Reply.plain(command_line, f"Changed directory to: {target}")
        if kind is CommandKind.PWD:
            return Reply.plain(command_line, self.session.current_directory)
        if kind is CommandKind.HISTORY:
            return Reply.plain(command_line, self._history_text())
        if kind is CommandKind.CLEAR:
            return Reply(command_line, "", clear_screen=True)
        if kind is CommandKind.MAN:
            return Reply.plain(command_line, self._manual(raw))

        plan = self.mapper.plan(kind, raw, self.session)
        if isinstance(plan, ResolvedInvocation):
            result = self.executor.run(plan)
            if not result.ok:
                raise CommandFailedError(f"Command failed with exit code {result.exit_code}", result.output)
            return Reply.classified(command_line, result.output)
        if plan.classify:
            return Reply.classified(command_line, plan.message)
        return Reply.plain(command_line, plan.message)

    def _history_text(self) -> str:
        entries = self.session.history_entries()
        if not entries:
            return "No commands in history"
        rows = ["Command history:"]
        rows.extend(f"{i:3d}: {entry}" for i, entry in enumerate(entries, 1))
        return "\n".join(rows)

    def _manual(self, raw: str) -> str:
        name = raw.strip()
        if not name:
            return "What manual page do you want? Usage: man command"
        try:
            kind = CommandKind.parse(name)
        except UnknownCommandError:
            return f"No manual entry for {name}"
        return usage(kind)
