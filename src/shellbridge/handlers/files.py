"""Copy, move, create, compress and identify files."""

from __future__ import annotations

import os

from loguru import logger

from ..errors import CommandFailedError, InvalidPathError, MissingArgumentError, SourceNotFoundError
from ..executor import cmd_argv
from .base import HandlerContext, SpecialResult, require_tokens


def _transfer(ctx: HandlerContext, raw: str, command: str, native: list[str], label: str) -> SpecialResult:
    if not raw.strip():
        raise MissingArgumentError(f"{command} requires source and destination arguments")
    source, destination = require_tokens(raw, command, "source and destination arguments", 2)

    source_path = ctx.existing(source, SourceNotFoundError, "Source file/directory does not exist")
    destination_path = ctx.resolve(destination)
    # A trailing separator names a directory; create it so the copy lands inside
    if destination.endswith(("/", "\\")) and not os.path.exists(destination_path):
        logger.debug("{}.mkdir destination={}", command, destination_path)
        try:
            os.makedirs(destination_path, exist_ok=True)
        except OSError as e:
            raise InvalidPathError(f"Cannot create destination directory: {destination}", e.strerror or str(e))

    result = ctx.run([*native, source_path, destination_path])
    if not result.ok:
        raise CommandFailedError(
            f"{label} failed. Verify paths and permissions.\n"
            f"Source: {source}\n"
            f"Destination: {destination}",
            result.output,
        )
    past = "Copied" if label == "Copy" else "Moved"
    return SpecialResult(f"{past} successfully: {source} → {destination}", classify=False)


def copy_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    return _transfer(ctx, raw, "cp", ["cp"], "Copy")


def copy_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    return _transfer(ctx, raw, "cp", cmd_argv("copy"), "Copy")


def move_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    return _transfer(ctx, raw, "mv", ["mv"], "Move")


def move_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    return _transfer(ctx, raw, "mv", cmd_argv("move"), "Move")


def touch_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    """``cmd`` has no touch; create the file directly."""
    (name,) = require_tokens(raw, "touch", "a filename argument", 1)
    path = ctx.resolve(name)
    if os.path.exists(path):
        return SpecialResult(f"File already exists: {path}", classify=False)
    try:
        with open(path, "x", encoding="utf-8"):
            pass
    except OSError as e:
        raise CommandFailedError(f"Error creating file: {e.strerror or e}")
    return SpecialResult(f"Created empty file: {path}", classify=False)


# --- compression ---

def gzip_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    (name,) = require_tokens(raw, "gzip", "a file argument", 1)
    path = ctx.existing(name)
    ctx.run_checked(["gzip", path], "gzip failed")
    return SpecialResult(f"Compressed: {name}.gz", classify=False)


def gzip_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    # NTFS compression happens in place, so the name does not change
    (name,) = require_tokens(raw, "gzip", "a file argument", 1)
    path = ctx.existing(name)
    ctx.run_checked(cmd_argv("compact", "/C", path), "Compression failed")
    return SpecialResult(f"Compressed: {name}", classify=False)


# --- type detection ---

_WINDOWS_TYPES = {
    (".exe", ".com", ".bat", ".cmd", ".ps1", ".msi"): "executable",
    (".txt", ".md", ".log", ".csv", ".ini", ".cfg"): "text",
    (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico"): "image",
    (".zip", ".gz", ".7z", ".rar", ".tar"): "archive",
    (".pdf", ".doc", ".docx", ".xls", ".xlsx"): "document",
    (".dll", ".sys"): "library",
}


def file_type_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    (name,) = require_tokens(raw, "file", "a file argument", 1)
    path = ctx.existing(name)
    output = ctx.run_checked(["file", path], "file failed")
    return SpecialResult(output)


def file_type_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    (name,) = require_tokens(raw, "file", "a file argument", 1)
    path = ctx.existing(name)
    kind = "unknown"
    if os.path.isdir(path):
        kind = "directory"
    else:
        ext = os.path.splitext(path)[1].lower()
        for extensions, label in _WINDOWS_TYPES.items():
            if ext in extensions:
                kind = label
                break
    return SpecialResult(f"{name}: {kind}", classify=False)
