"""Runtime logging helpers."""

from __future__ import annotations

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED_LEVEL: str | None = None


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    """Configure process-level logging once per level."""

    global _CONFIGURED_LEVEL
    level = level.upper()
    if level == _CONFIGURED_LEVEL:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    logger.remove()
    logger.add(
        handler,
        level=level,
        format="{message}",
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED_LEVEL = level
