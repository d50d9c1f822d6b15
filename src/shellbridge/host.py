"""Host platform identification."""

from __future__ import annotations

import os
import platform
from enum import Enum
from pathlib import Path
from typing import Optional


class Platform(str, Enum):
    """The two native toolchains commands are translated for."""
    POSIX = "posix"
    WINDOWS = "windows"


def os_name() -> str:
    return platform.system().lower()


def detect_platform(override: Optional[str] = None) -> Platform:
    """Return the platform to translate for.

    ``override`` comes from configuration; ``"auto"`` or ``None`` asks the
    host. ``platform.system()`` is used rather than a substring test so that
    ``darwin`` is not mistaken for Windows.
    """
    if override and override != "auto":
        return Platform(override.lower())
    if os_name().startswith("windows") or os.name == "nt":
        return Platform.WINDOWS
    return Platform.POSIX


def home_directory() -> str:
    return str(Path.home())
