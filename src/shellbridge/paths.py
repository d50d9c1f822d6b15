"""Path resolution and argument tokenizing.

Both are pure functions: nothing here touches the filesystem.
"""

from __future__ import annotations

import os
from typing import List

from .errors import InvalidPathError


def is_absolute(path: str) -> bool:
    """True for ``/x``, ``\\x`` and drive-letter forms like ``C:\\x``."""
    return path.startswith(("/", "\\")) or (len(path) > 1 and path[1] == ":")


def parent_of(base: str) -> str:
    parent = os.path.dirname(os.path.normpath(base))
    if not parent or parent == os.path.normpath(base):
        raise InvalidPathError(f"Directory has no parent: {base}")
    return parent


def resolve(path: str, base: str, home: str) -> str:
    """Turn a user-supplied path into an absolute path anchored at ``base``.

    Rules, first match wins:
      - empty string: the user's home directory
      - ``..``: the parent of ``base``
      - absolute (leading separator or drive letter): the path itself
      - anything else: joined onto ``base``
    """
    if path == "":
        return home
    if path == "..":
        return parent_of(base)
    if is_absolute(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(base, path))


def tokenize(raw: str) -> List[str]:
    """Split ``raw`` on whitespace, keeping double-quoted runs together.

    Quote characters are dropped. An unterminated quote simply runs to the
    end of the string.

    >>> tokenize('a "b c" d')
    ['a', 'b c', 'd']
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False

    for ch in raw:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)

    if current:
        tokens.append("".join(current))
    return tokens


def split_leading(raw: str) -> tuple[str, str]:
    """Split off the first whitespace-delimited word.

    The remainder keeps its inner spacing and loses any double quotes, so an
    unquoted path with spaces still works as a trailing argument.
    """
    parts = raw.strip().split(maxsplit=1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].replace('"', "").strip()
