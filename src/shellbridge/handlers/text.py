"""Reading and searching file contents: cat, less, head, grep, wc."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import List

from loguru import logger

from ..errors import (
    CommandFailedError,
    InvalidArgumentError,
    MissingArgumentError,
    MissingFileError,
    TooManyArgumentsError,
)
from ..executor import cmd_argv, powershell_argv, ps_quote
from ..paths import tokenize
from .base import HandlerContext, SpecialResult, require_tokens

DEFAULT_HEAD_LINES = 10


def _existing_files(ctx: HandlerContext, raw: str, command: str) -> List[tuple[str, str]]:
    """Resolve every file token up front so nothing is spawned for a bad list."""
    tokens = tokenize(raw)
    if not tokens:
        raise MissingArgumentError(f"{command} requires at least one file argument")
    return [(token, ctx.existing(token)) for token in tokens]


# --- cat ---

def cat_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    files = _existing_files(ctx, raw, "cat")
    output = ctx.run_checked(["cat", *(path for _, path in files)], "Failed to read files")
    return SpecialResult(output)


def cat_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    files = _existing_files(ctx, raw, "cat")
    chunks = []
    for token, path in files:
        chunks.append(ctx.run_checked(cmd_argv("type", path), f"Failed to read file: {token}"))
    return SpecialResult("".join(chunks))


# --- less ---

def _single_file(ctx: HandlerContext, raw: str, command: str) -> str:
    tokens = tokenize(raw)
    if not tokens:
        raise MissingArgumentError(f"{command} requires a file argument")
    if len(tokens) > 1:
        raise TooManyArgumentsError(f"{command} only supports one file at a time")
    return ctx.existing(tokens[0])


def less_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    # Without a tty on stdout, less prints the whole file like cat
    path = _single_file(ctx, raw, "less")
    return SpecialResult(ctx.run_checked(["less", path], "less failed"))


def less_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    path = _single_file(ctx, raw, "less")
    return SpecialResult(ctx.run_checked(cmd_argv("more", path), "more failed"))


# --- head ---

def parse_head_arguments(raw: str) -> tuple[int, str]:
    """Return ``(count, file_token)`` from ``[-n count] file``."""
    tokens = tokenize(raw)
    if not tokens:
        raise MissingArgumentError("head requires a file argument")

    count = DEFAULT_HEAD_LINES
    if tokens[0] == "-n":
        if len(tokens) < 2:
            raise InvalidArgumentError("head -n requires a line count")
        try:
            count = int(tokens[1])
        except ValueError:
            raise InvalidArgumentError(f"Invalid line count: {tokens[1]}")
        if count < 0:
            raise InvalidArgumentError(f"Invalid line count: {tokens[1]}")
        tokens = tokens[2:]

    if not tokens:
        raise MissingArgumentError("head requires a file argument")
    if len(tokens) > 1:
        raise TooManyArgumentsError("head only supports one file at a time")
    return count, tokens[0]


def head_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    count, name = parse_head_arguments(raw)
    path = ctx.existing(name)
    return SpecialResult(ctx.run_checked(["head", "-n", str(count), path], "head failed"))


def head_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    count, name = parse_head_arguments(raw)
    path = ctx.existing(name)
    script = f"Get-Content -LiteralPath {ps_quote(path)} -Head {count}"
    return SpecialResult(ctx.run_checked(powershell_argv(script), "head failed"))


# --- grep ---

def _grep(ctx: HandlerContext, raw: str, argv_for) -> SpecialResult:
    if not raw.strip():
        raise MissingArgumentError("grep requires a pattern and file argument")
    pattern, name = require_tokens(raw, "grep", "pattern and file arguments", 2)
    path = ctx.existing(name)

    result = ctx.run(argv_for(pattern, path))
    # Exit status 1 with nothing printed is "no lines selected", not an error
    if result.exit_code == 1 and not result.output.strip():
        logger.info("grep.no_match pattern={} file={}", pattern, name)
        return SpecialResult(f"No lines matching '{pattern}' in {name}", classify=False)
    if not result.ok:
        raise CommandFailedError(f"grep failed with exit code {result.exit_code}", result.output)
    return SpecialResult(result.output)


def grep_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    return _grep(ctx, raw, lambda pattern, path: ["grep", "-n", "--", pattern, path])


def grep_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    return _grep(ctx, raw, lambda pattern, path: cmd_argv("findstr", "/n", pattern, path))


# --- wc ---

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class TextCounts:
    lines: int
    words: int
    chars: int

    def __add__(self, other: "TextCounts") -> "TextCounts":
        return TextCounts(self.lines + other.lines, self.words + other.words, self.chars + other.chars)

    def format(self, label: str) -> str:
        return f"{self.lines:7d} {self.words:7d} {self.chars:7d} {label}"


def count_lines(content: str) -> int:
    """Count lines across ``\\r\\n``, ``\\r`` and ``\\n`` endings.

    Every terminator ends one line, and a trailing segment without a
    terminator is one more line: ``"a\\nb\\nc\\n"`` and ``"a\\nb\\nc"`` both
    count 3. Empty content has no lines.
    """
    if not content:
        return 0
    segments = _LINE_BREAK.split(content)
    # split() leaves an empty last segment exactly when content ends in a terminator
    if segments[-1] == "":
        segments.pop()
    return len(segments)


def count_text(content: str) -> TextCounts:
    return TextCounts(count_lines(content), len(content.split()), len(content))


def wc(ctx: HandlerContext, raw: str) -> SpecialResult:
    tokens = tokenize(raw)
    if not tokens:
        raise MissingArgumentError("wc requires at least one file argument")

    rows = []
    total = TextCounts(0, 0, 0)
    for token in tokens:
        path = ctx.resolve(token)
        if not os.path.isfile(path):
            raise MissingFileError(f"File not found: {token}")
        with open(path, "rb") as fh:
            content = fh.read().decode("utf-8", errors="replace")
        counts = count_text(content)
        rows.append(counts.format(token))
        total = total + counts

    if len(tokens) > 1:
        rows.append(total.format("total"))
    return SpecialResult("\n".join(rows) + "\n")
