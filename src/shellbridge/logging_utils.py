"""Runtime logging helpers."""

from __future__ import annotations

from logging import Handler
from typing import Optional

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "{name}:{function}:{line} | {message}"
_CONFIGURED_LEVEL: Optional[str] = None


def _build_handler(console: Optional[Console]) -> Handler:
    return RichHandler(
        console=console or Console(stderr=True),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Route loguru through rich on stderr, once per level."""
    global _CONFIGURED_LEVEL
    level = level.upper()
    if level == _CONFIGURED_LEVEL:
        return

    logger.remove()
    logger.add(
        _build_handler(console),
        level=level,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED_LEVEL = level
