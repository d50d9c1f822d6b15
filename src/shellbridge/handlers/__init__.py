"""Dedicated per-command handlers.

Each handler takes a ``HandlerContext`` and the raw argument text, validates
and resolves its arguments, runs whatever native steps the platform needs
and returns a ``SpecialResult``.
"""

from .base import Handler, HandlerContext, PlatformPair, SpecialResult, both

__all__ = [
    "Handler",
    "HandlerContext",
    "PlatformPair",
    "SpecialResult",
    "both",
]
