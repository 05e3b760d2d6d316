"""
Discovery of the external AnyList client library.

The protocol work lives in a separate client package. It is located either
through an explicit ``module:attribute`` path or through the
``anylist_cli.clients`` entry point group.
"""

import importlib
from importlib.metadata import entry_points
from typing import Callable, Optional
import logging

from anylist_cli.core.errors import ClientUnavailableError
from anylist_cli.core.types import AnyListClient

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "anylist_cli.clients"

ClientFactory = Callable[..., AnyListClient]


def _import_path(path: str) -> ClientFactory:
    module_name, _, attr_path = path.partition(":")
    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ClientUnavailableError(
            f"Cannot import client module '{module_name}': {e}",
            original_error=e,
        ) from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ClientUnavailableError(
                f"Client module '{module_name}' has no attribute '{attr_path}'",
                original_error=e,
            ) from e

    if not callable(target):
        raise ClientUnavailableError(f"Client '{path}' is not callable")
    return target


def load_client_factory(path: Optional[str] = None) -> ClientFactory:
    """Locate the callable that constructs an AnyList client.

    Args:
        path: Explicit ``module:attribute`` path; takes precedence over
            entry points

    Returns:
        A factory called as ``factory(email=..., password=...)``

    Raises:
        ClientUnavailableError: If no client can be found or imported
    """
    if path:
        logger.debug(f"Loading client factory from {path}")
        return _import_path(path)

    candidates = sorted(entry_points(group=ENTRY_POINT_GROUP), key=lambda ep: ep.name)
    if not candidates:
        raise ClientUnavailableError()

    if len(candidates) > 1:
        logger.warning(
            f"Multiple AnyList clients installed ({', '.join(ep.name for ep in candidates)}); "
            f"using '{candidates[0].name}'"
        )

    entry_point = candidates[0]
    logger.debug(f"Loading client factory from entry point {entry_point.name}")
    try:
        return entry_point.load()
    except ImportError as e:
        raise ClientUnavailableError(
            f"Cannot load client '{entry_point.name}': {e}",
            original_error=e,
        ) from e
