"""Per-process session state: working directory and command history."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InvalidPathError
from .host import Platform, home_directory
from .paths import resolve


@dataclass(frozen=True)
class ExecutedCommand:
    name: str
    raw_arguments: str = ""

    def __str__(self) -> str:
        if self.raw_arguments:
            return f"{self.name} {self.raw_arguments}"
        return self.name


@dataclass
class Session:
    """State shared by every command of one interactive session.

    ``current_directory`` only changes through ``change_directory`` and is
    always an existing directory.
    """
    current_directory: str
    platform: Platform
    home: str
    history: List[ExecutedCommand] = field(default_factory=list)
    history_cursor: int = 0

    @classmethod
    def start(
        cls,
        platform: Platform,
        home: Optional[str] = None,
        cwd: Optional[str] = None,
    ) -> "Session":
        home = os.path.abspath(home or home_directory())
        cwd = os.path.abspath(cwd or os.getcwd())
        if not os.path.isdir(cwd):
            raise InvalidPathError(f"Directory not found: {cwd}")
        return cls(current_directory=cwd, platform=platform, home=home)

    def resolve(self, path: str) -> str:
        return resolve(path, self.current_directory, self.home)

    def change_directory(self, path: str) -> str:
        target = self.resolve(path)
        if not os.path.isdir(target):
            raise InvalidPathError(f"Directory not found: {target}")
        self.current_directory = target
        return target

    def record(self, name: str, raw_arguments: str = "") -> None:
        if name == "history":
            self.history_cursor = len(self.history)
            return
        self.history.append(ExecutedCommand(name, raw_arguments))
        self.history_cursor = len(self.history)

    def history_entries(self) -> List[str]:
        return [str(entry) for entry in self.history]

    # --- cursor navigation ---

    def previous_entry(self) -> Optional[ExecutedCommand]:
        if not self.history:
            return None
        if self.history_cursor > 0:
            self.history_cursor -= 1
        return self.history[self.history_cursor]

    def next_entry(self) -> Optional[ExecutedCommand]:
        """Step towards the newest entry; stepping past it returns ``None``."""
        if not self.history:
            return None
        if self.history_cursor < len(self.history) - 1:
            self.history_cursor += 1
            return self.history[self.history_cursor]
        self.history_cursor = len(self.history)
        return None
