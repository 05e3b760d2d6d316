"""
Utilities package for anylist-cli.
"""

__all__ = ["log"]
