# src/blockfall/core/utils/logging.py
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_PLAIN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def _level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return int(getattr(logging, str(level).strip().upper(), logging.INFO))


def setup_logger(
        *,
        name: str = "blockfall",
        use_rich: bool = True,
        level: str | int = "info",
        console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the `name` logger (normally the package root, so every
    `blockfall.*` module logger inherits it). Safe to call more than once.
    """
    logger = logging.getLogger(str(name))
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(_level(level))

    handler: logging.Handler
    if use_rich:
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))

    logger.addHandler(handler)
    return logger


__all__ = ["setup_logger"]
