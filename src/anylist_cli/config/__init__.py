"""
Configuration package for anylist-cli.

This package contains runtime settings and the local credential store.
"""

__all__ = ["settings", "credentials"]
