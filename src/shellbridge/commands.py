"""The fixed command vocabulary.

Command names are parsed into ``CommandKind`` once, at the boundary; every
other module dispatches on the enum.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .errors import UnknownCommandError


class CommandKind(str, Enum):
    LS = "ls"
    PWD = "pwd"
    MKDIR = "mkdir"
    CD = "cd"
    MAN = "man"
    TOUCH = "touch"
    CP = "cp"
    MV = "mv"
    RM = "rm"
    RMDIR = "rmdir"
    CAT = "cat"
    LESS = "less"
    HEAD = "head"
    GREP = "grep"
    WC = "wc"
    CHMOD = "chmod"
    CHOWN = "chown"
    CHGRP = "chgrp"
    ADD_USER = "addUser"
    ADD_GROUP = "addGroup"
    PS = "ps"
    QUOTACHECK = "quotacheck"
    DU = "du"
    GZIP = "gzip"
    FILE = "file"
    FIND = "find"
    LOCATE = "locate"
    WGET = "wget"
    ACCESS_RIGHTS = "accessrights"
    HISTORY = "history"
    CLEAR = "clear"

    @classmethod
    def parse(cls, name: str) -> "CommandKind":
        """Look up a command by name, ignoring case (``adduser`` == ``addUser``)."""
        kind = _BY_LOWER_NAME.get(name.strip().lower())
        if kind is None:
            raise UnknownCommandError(f"Unknown command: {name.strip() or '(empty)'}")
        return kind


_BY_LOWER_NAME: Dict[str, CommandKind] = {k.value.lower(): k for k in CommandKind}

SUPPORTED_COMMANDS = [k.value for k in CommandKind]

# Commands answered by the engine without going through the mapper
BUILTINS = frozenset({
    CommandKind.CD,
    CommandKind.PWD,
    CommandKind.HISTORY,
    CommandKind.CLEAR,
    CommandKind.MAN,
})


@dataclass(frozen=True)
class CommandRequest:
    name: str
    raw_arguments: str = ""


HINTS: Dict[CommandKind, str] = {
    CommandKind.LS: "[directory] (lists directory contents)",
    CommandKind.PWD: "(prints working directory)",
    CommandKind.MKDIR: "directory_name (creates a directory)",
    CommandKind.CD: "directory_path (changes directory)",
    CommandKind.MAN: "command (shows usage for command)",
    CommandKind.TOUCH: "file_name (creates empty file)",
    CommandKind.CP: "source_file target_file (copies file)",
    CommandKind.MV: "source target (moves/renames file)",
    CommandKind.RM: "file_name (removes file)",
    CommandKind.RMDIR: "directory_name (removes empty directory)",
    CommandKind.CAT: "file_name... (displays file content)",
    CommandKind.LESS: "file_name (views file content page by page)",
    CommandKind.HEAD: "[-n lines] file_name (shows first lines of file)",
    CommandKind.GREP: "pattern file_name (searches for pattern in file)",
    CommandKind.WC: "file_name... (counts lines, words, characters)",
    CommandKind.CHMOD: (
        "permissions file (change file permissions)\n"
        "Examples:\n"
        "  chmod 755 script.sh\n"
        "  chmod +x executable\n"
        "Permissions: 4=read, 2=write, 1=execute"
    ),
    CommandKind.CHOWN: (
        "owner[:group] file (change file owner)\n"
        "Examples:\n"
        "  chown user file.txt\n"
        "  chown user:group file.txt\n"
        "Note: Requires admin/sudo on most systems"
    ),
    CommandKind.CHGRP: (
        "group file (change file group)\n"
        "Examples:\n"
        "  chgrp developers app.jar\n"
        "Note: Requires admin/sudo on most systems"
    ),
    CommandKind.ADD_USER: "username (adds a new user - requires admin)",
    CommandKind.ADD_GROUP: "groupname (adds a new group - requires admin)",
    CommandKind.PS: "(displays running processes)",
    CommandKind.QUOTACHECK: "[drive:] (check filesystem quotas)",
    CommandKind.DU: "[directory] (shows disk usage)",
    CommandKind.GZIP: "file_name (compresses file)",
    CommandKind.FILE: "file_name (determines file type)",
    CommandKind.FIND: "pattern (finds files whose name contains pattern)",
    CommandKind.LOCATE: "pattern (finds files in database)",
    CommandKind.WGET: "URL [output_file] (downloads file from internet)",
    CommandKind.ACCESS_RIGHTS: "file_or_directory (displays access rights)",
    CommandKind.HISTORY: "(shows command history)",
    CommandKind.CLEAR: "(clears the output screen)",
}


def usage(kind: CommandKind) -> str:
    return f"{kind.value} {HINTS[kind]}"
