from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route all ``dualvfs`` loggers through a rich handler.

    Safe to call more than once; the root configuration is replaced.
    """
    handler = RichHandler(console=console, show_path=False, markup=False)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
