"""Logging configuration for the CLI.

Module loggers (`logging.getLogger(__name__)`) stay handler-free; the CLI
attaches one Rich handler on stderr so stdout carries only the link.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "open-in-ado"


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger once; later calls only change the level."""

    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root.setLevel(numeric_level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
