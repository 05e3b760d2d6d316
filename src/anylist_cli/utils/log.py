"""Logging setup for anylist-cli."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", no_color: bool = False) -> None:
    """Route log records to stderr through Rich.

    Args:
        level: Logging level name
        no_color: Disable colored log output
    """
    handler = RichHandler(
        console=Console(stderr=True, color_system=None if no_color else "auto"),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    package_logger = logging.getLogger("anylist_cli")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
