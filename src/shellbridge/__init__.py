"""shellbridge: one command vocabulary translated for POSIX and Windows hosts.

The engine maps a portable command name plus free-form argument text to a
native invocation, runs it, and classifies the merged output:

- ``ShellEngine``  - the boundary the front end talks to
- ``Session``      - working directory and command history
- ``CommandMapper`` - per-platform strategy table
"""

from .engine import Reply, ShellEngine
from .host import Platform, detect_platform
from .mapper import CommandMapper
from .session import Session

__version__ = "0.1.0"

__all__ = [
    "CommandMapper",
    "Platform",
    "Reply",
    "Session",
    "ShellEngine",
    "detect_platform",
]
