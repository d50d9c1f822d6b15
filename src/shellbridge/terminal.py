"""Terminal input with readline-like features.

Provides:
- Input history with up/down arrow navigation (persisted across sessions)
- Tab completion for the command vocabulary and for paths
- Standard line editing (Ctrl+A, Ctrl+E, Ctrl+K, etc.)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion, PathCompleter
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

from .commands import SUPPORTED_COMMANDS


def _get_history_path() -> Path:
    """Get path to the input history file."""
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / "shellbridge" / "history"
    return Path(os.environ.get("XDG_DATA_HOME", str(Path.home() / ".local" / "share"))) / "shellbridge" / "history"


class CommandCompleter(Completer):
    """Completes command names first, then paths relative to the session directory."""

    FRONTEND_COMMANDS = ["/exit", "/quit", "/help", "/clear"]

    def __init__(self, cwd_getter: Callable[[], str], commands: Iterable[str] = SUPPORTED_COMMANDS):
        self.cwd_getter = cwd_getter
        self.commands = sorted(commands)
        self._path_completer = PathCompleter(
            expanduser=True,
            get_paths=lambda: [self.cwd_getter()],
        )

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor

        if text.startswith("/") and " " not in text:
            for cmd in self.FRONTEND_COMMANDS:
                if cmd.startswith(text):
                    yield Completion(cmd, start_position=-len(text))
            return

        # First word: the command vocabulary
        if " " not in text.lstrip():
            word = text.lstrip()
            for cmd in self.commands:
                if cmd.lower().startswith(word.lower()):
                    yield Completion(cmd, start_position=-len(word))
            return

        # Later words: paths anchored at the session directory
        last_word = text.split(" ")[-1].lstrip('"')
        path_document = Document(last_word, cursor_position=len(last_word))
        yield from self._path_completer.get_completions(path_document, complete_event)


class TerminalInput:
    """Prompt with history and completion.

    Usage:
        terminal = TerminalInput(cwd_getter=engine.current_working_directory)
        while True:
            line = terminal.prompt("$ ")
            if line is None:  # EOF/Ctrl+D
                break
            process(line)
    """

    def __init__(
        self,
        cwd_getter: Optional[Callable[[], str]] = None,
        history_enabled: bool = True,
    ):
        self.cwd_getter = cwd_getter or os.getcwd

        if history_enabled:
            history_path = _get_history_path()
            history_path.parent.mkdir(parents=True, exist_ok=True)
            history = FileHistory(str(history_path))
        else:
            history = InMemoryHistory()

        style = Style.from_dict({
            "prompt": "bold green",
            "path": "cyan",
        })

        bindings = KeyBindings()

        @bindings.add("c-l")
        def clear_screen(event):
            """Clear the screen."""
            event.app.renderer.clear()

        self._session = PromptSession(
            history=history,
            completer=CommandCompleter(self.cwd_getter),
            complete_while_typing=False,  # Only complete on Tab
            style=style,
            key_bindings=bindings,
            enable_history_search=True,  # Ctrl+R for reverse search
        )

    def prompt(self, prompt_text: str = "$ ", default: str = "") -> Optional[str]:
        """Read one line; ``None`` on EOF (Ctrl+D) or interrupt (Ctrl+C)."""
        try:
            return self._session.prompt(prompt_text, default=default)
        except (EOFError, KeyboardInterrupt):
            return None
