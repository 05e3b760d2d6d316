"""
CLI interface package for anylist-cli.

This package contains the Typer application, its commands and the
text/JSON output renderers.
"""

__all__ = ["app", "output"]
