"""Permission, ownership and access-rights commands."""

from __future__ import annotations

import os
import re
import shutil
import stat
from dataclasses import dataclass
from typing import Tuple

from loguru import logger

from ..errors import (
    CommandFailedError,
    MissingArgumentError,
    PermissionDeniedError,
    UnsupportedOperationError,
)
from ..executor import cmd_argv
from ..paths import split_leading
from .base import HandlerContext, SpecialResult

_OCTAL_MODE = re.compile(r"^[0-7]{3}$")
_NOT_PERMITTED = ("operation not permitted", "permission denied")


@dataclass(frozen=True)
class PermissionFlags:
    read: bool
    write: bool
    execute: bool

    @classmethod
    def from_digit(cls, digit: int) -> "PermissionFlags":
        return cls(read=bool(digit & 4), write=bool(digit & 2), execute=bool(digit & 1))


def mode_to_flags(mode: str) -> Tuple[PermissionFlags, PermissionFlags, PermissionFlags]:
    """Split a 3-digit octal mode into owner, group and other flags."""
    if not _OCTAL_MODE.match(mode):
        raise UnsupportedOperationError("Windows only supports numeric permissions (e.g., 755)")
    owner, group, other = (PermissionFlags.from_digit(int(d)) for d in mode)
    return owner, group, other


def _target(ctx: HandlerContext, raw: str, command: str, what: str) -> Tuple[str, str, str]:
    """Parse ``<value> <path>``; the path may contain unquoted spaces."""
    if not raw.strip():
        raise MissingArgumentError(f"{command} requires {what} and file arguments")
    value, name = split_leading(raw)
    if not name:
        raise MissingArgumentError(f"{command} requires both {what} and file arguments")
    return value, name, ctx.existing(name)


def _denied(output: str) -> bool:
    lowered = output.lower()
    return any(marker in lowered for marker in _NOT_PERMITTED)


def _run_posix(ctx: HandlerContext, argv: list[str], failure: str) -> None:
    result = ctx.run(argv)
    if result.ok:
        return
    if _denied(result.output):
        raise PermissionDeniedError(failure, result.output)
    raise CommandFailedError(failure, result.output)


# --- chmod ---

def chmod_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    mode, name, path = _target(ctx, raw, "chmod", "permissions")
    _run_posix(ctx, ["chmod", mode, path], "Failed to change permissions")
    return SpecialResult(f"Changed permissions for {name}", classify=False)


def chmod_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    """Windows has no permission bits; apply the owner digit as flags."""
    mode, name, path = _target(ctx, raw, "chmod", "permissions")
    owner, _, _ = mode_to_flags(mode)

    bits = 0
    if owner.read:
        bits |= stat.S_IREAD
    if owner.write:
        bits |= stat.S_IWRITE
    if owner.execute:
        bits |= stat.S_IEXEC
    try:
        os.chmod(path, bits)
    except OSError as e:
        raise PermissionDeniedError(f"Failed to change permissions: {e.strerror or e}")
    return SpecialResult(
        f"Set permissions for {name} (read={owner.read}, write={owner.write}, execute={owner.execute})",
        classify=False,
    )


# --- chown / chgrp ---

def chown_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    owner, name, path = _target(ctx, raw, "chown", "owner")
    _run_posix(ctx, ["chown", owner, path], "Failed to change owner")
    return SpecialResult(f"Changed owner of {name} to {owner}", classify=False)


def chown_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    owner, name, path = _target(ctx, raw, "chown", "owner")
    # icacls can only hand ownership on once we hold it ourselves
    ctx.run_checked(
        cmd_argv("takeown", "/f", path),
        "Failed to take ownership (Admin required)",
        PermissionDeniedError,
    )
    ctx.run_checked(
        cmd_argv("icacls", path, "/setowner", owner, "/t", "/c", "/l", "/q"),
        "Failed to change owner (Admin required)",
        PermissionDeniedError,
    )
    return SpecialResult(f"Changed owner of {name} to {owner}", classify=False)


def chgrp_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    group, name, path = _target(ctx, raw, "chgrp", "group")
    _run_posix(ctx, ["chgrp", group, path], "Failed to change group")
    return SpecialResult(f"Changed group of {name} to {group}", classify=False)


def chgrp_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    group, name, path = _target(ctx, raw, "chgrp", "group")
    ctx.run_checked(
        cmd_argv("icacls", path, "/grant:r", f"{group}:(R,W,Rc)", "/T", "/C", "/Q"),
        "Failed to change group (Run as Administrator)",
        PermissionDeniedError,
    )
    return SpecialResult(f"Modified permissions for group {group} on {name}", classify=False)


# --- accessrights ---

def _target_or_cwd(ctx: HandlerContext, raw: str) -> str:
    name = raw.strip().replace('"', "")
    if not name:
        return ctx.cwd
    return ctx.existing(name, label="File/directory not found")


def access_rights_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    path = _target_or_cwd(ctx, raw)
    lines = [f"Access rights for: {path}"]
    lines.append(ctx.run_checked(["ls", "-ld", path], "Failed to get access rights").rstrip("\n"))

    if shutil.which("getfacl"):
        acl = ctx.run(["getfacl", path])
        if acl.ok:
            lines.append("")
            lines.append("ACL details:")
            lines.append(acl.output.rstrip("\n"))
    return SpecialResult("\n".join(lines) + "\n")


def _is_hidden(path: str) -> bool:
    attributes = getattr(os.stat(path), "st_file_attributes", 0)
    hidden_flag = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 2)
    return bool(attributes & hidden_flag) or os.path.basename(path).startswith(".")


def access_rights_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    path = _target_or_cwd(ctx, raw)
    lines = [
        f"Access rights for: {path}",
        f"Readable: {str(os.access(path, os.R_OK)).lower()}",
        f"Writable: {str(os.access(path, os.W_OK)).lower()}",
        f"Executable: {str(os.access(path, os.X_OK)).lower()}",
        f"Hidden: {str(_is_hidden(path)).lower()}",
    ]
    acl = ctx.run(cmd_argv("icacls", path))
    lines.append("")
    if acl.ok:
        lines.append("Detailed permissions:")
        lines.append(acl.output.rstrip("\n"))
    else:
        logger.warning("accessrights.icacls_failed path={} code={}", path, acl.exit_code)
        lines.append("Could not retrieve detailed permissions (Admin required)")
    return SpecialResult("\n".join(lines) + "\n")
