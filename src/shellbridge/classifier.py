"""Presentation labels for command output.

A best-effort heuristic: labels decide colors only and never feed back into
success or failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List


class LineCategory(str, Enum):
    COMMAND = "command"
    OUTPUT = "output"
    ERROR = "error"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class ClassifiedLine:
    text: str
    category: LineCategory


_NUMERIC = re.compile(r"^(total|\d)")
_UNIX_LISTING = re.compile(r"^[drwx-]+\s+\d+")
_WINDOWS_LISTING = re.compile(r"^\d+/\d+/\d+\s+\d+:\d+\s+[AP]M")
_ERROR_WORDS = ("error", "fail")
_DRIVE_PATH = re.compile(r"^[A-Za-z]:[\\/]")


def classify_line(line: str) -> LineCategory:
    if _NUMERIC.match(line):
        return LineCategory.OUTPUT
    if _UNIX_LISTING.match(line):
        return LineCategory.OUTPUT
    if _WINDOWS_LISTING.match(line):
        return LineCategory.OUTPUT
    lowered = line.lower()
    if any(word in lowered for word in _ERROR_WORDS):
        return LineCategory.ERROR
    if _DRIVE_PATH.match(line):
        return LineCategory.DIRECTORY
    return LineCategory.OUTPUT


def classify(output: str) -> List[ClassifiedLine]:
    """Label each non-blank line of ``output``."""
    return [
        ClassifiedLine(line, classify_line(line))
        for line in output.splitlines()
        if line.strip()
    ]
