"""
Core components for anylist-cli.

This module provides the adapter over the external AnyList client library,
the serializable list/item types and the error hierarchy.
"""

__all__ = ["backend", "client", "errors", "types"]
