"""
anylist-cli - Unofficial command-line client for AnyList.

This package provides a command-line interface for managing AnyList grocery
and shopping lists: listing, adding, checking and removing items.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from typing import Final

# Package metadata
VERSION: Final[str] = __version__
PACKAGE_NAME: Final[str] = "anylist-cli"
PROG_NAME: Final[str] = "anylist"

__all__ = [
    "__version__",
    "VERSION",
    "PACKAGE_NAME",
    "PROG_NAME",
]
