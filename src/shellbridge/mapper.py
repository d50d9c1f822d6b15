"""Platform command mapping.

Commands with a dedicated handler go through a strategy table keyed by
``CommandKind``; everything else is forwarded to the native shell with only a
cosmetic rename.
"""

from __future__ import annotations

from typing import Dict, Union

from loguru import logger

from .commands import BUILTINS, CommandKind
from .errors import UnsupportedOperationError
from .executor import ProcessExecutor, ResolvedInvocation, cmd_argv
from .handlers import Handler, HandlerContext, PlatformPair, SpecialResult, both
from .handlers import files, permissions, search, system, text
from .host import Platform
from .paths import tokenize
from .session import Session

STRATEGIES: Dict[CommandKind, PlatformPair] = {
    CommandKind.CP: PlatformPair(files.copy_posix, files.copy_windows),
    CommandKind.MV: PlatformPair(files.move_posix, files.move_windows),
    CommandKind.TOUCH: PlatformPair(None, files.touch_windows),
    CommandKind.GZIP: PlatformPair(files.gzip_posix, files.gzip_windows),
    CommandKind.FILE: PlatformPair(files.file_type_posix, files.file_type_windows),
    CommandKind.CAT: PlatformPair(text.cat_posix, text.cat_windows),
    CommandKind.LESS: PlatformPair(text.less_posix, text.less_windows),
    CommandKind.HEAD: PlatformPair(text.head_posix, text.head_windows),
    CommandKind.GREP: PlatformPair(text.grep_posix, text.grep_windows),
    CommandKind.WC: both(text.wc),
    CommandKind.CHMOD: PlatformPair(permissions.chmod_posix, permissions.chmod_windows),
    CommandKind.CHOWN: PlatformPair(permissions.chown_posix, permissions.chown_windows),
    CommandKind.CHGRP: PlatformPair(permissions.chgrp_posix, permissions.chgrp_windows),
    CommandKind.ACCESS_RIGHTS: PlatformPair(
        permissions.access_rights_posix, permissions.access_rights_windows
    ),
    CommandKind.ADD_USER: PlatformPair(system.add_user_posix, system.add_user_windows),
    CommandKind.ADD_GROUP: PlatformPair(system.add_group_posix, system.add_group_windows),
    CommandKind.PS: PlatformPair(system.ps_posix, system.ps_windows),
    CommandKind.QUOTACHECK: PlatformPair(system.quotacheck_posix, system.quotacheck_windows),
    CommandKind.DU: PlatformPair(system.du_posix, system.du_windows),
    CommandKind.FIND: PlatformPair(search.find_posix, search.find_windows),
    CommandKind.LOCATE: PlatformPair(search.locate_posix, search.locate_windows),
    CommandKind.WGET: both(search.wget),
}

# cmd.exe spellings of the portable names that are simply forwarded
WINDOWS_NAMES: Dict[CommandKind, str] = {
    CommandKind.LS: "dir",
    CommandKind.RM: "del",
    CommandKind.MKDIR: "mkdir",
    CommandKind.RMDIR: "rmdir",
}

Plan = Union[ResolvedInvocation, SpecialResult]


class CommandMapper:
    """Turns a command into either a process to launch or a finished result.

    The strategy variant for the platform is picked once, here, so handlers
    never test the platform themselves.
    """

    def __init__(self, platform: Platform, executor: ProcessExecutor) -> None:
        self.platform = platform
        self.executor = executor
        self._handlers: Dict[CommandKind, Handler] = {}
        for kind, pair in STRATEGIES.items():
            handler = pair.for_platform(platform)
            if handler is not None:
                self._handlers[kind] = handler

    def has_dedicated_handler(self, kind: CommandKind) -> bool:
        return kind in self._handlers

    def plan(self, kind: CommandKind, raw_arguments: str, session: Session) -> Plan:
        if kind in BUILTINS:
            raise UnsupportedOperationError(f"{kind.value} is handled by the session, not the native shell")

        handler = self._handlers.get(kind)
        if handler is not None:
            logger.debug("plan.dedicated command={} platform={}", kind.value, self.platform.value)
            return handler(HandlerContext(session, self.executor), raw_arguments)

        invocation = self.passthrough(kind, raw_arguments, session)
        logger.debug("plan.passthrough command={} argv={}", kind.value, invocation.display())
        return invocation

    def passthrough(self, kind: CommandKind, raw_arguments: str, session: Session) -> ResolvedInvocation:
        tokens = tokenize(raw_arguments)
        if self.platform is Platform.WINDOWS:
            argv = cmd_argv(self.native_name(kind), *tokens)
        else:
            argv = [kind.value, *tokens]
        return ResolvedInvocation(argv, session.current_directory)

    def native_name(self, kind: CommandKind) -> str:
        if self.platform is Platform.WINDOWS:
            return WINDOWS_NAMES.get(kind, kind.value)
        return kind.value
