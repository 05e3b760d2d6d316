"""
Structured error system for anylist-cli.

Every error carries the process exit code it maps to, so the command layer
can translate any failure into a message and an exit status in one place.
"""

from typing import Any, Dict, List, Optional
import logging

from anylist_cli.core.types import ExitCode

logger = logging.getLogger(__name__)


class AnyListCliError(Exception):
    """Base exception for all anylist-cli errors."""

    exit_code: ExitCode = ExitCode.FAILURE

    def __init__(
        self,
        message: str,
        hints: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.hints = hints or []
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        data: Dict[str, Any] = {
            "error": self.message,
            "type": self.__class__.__name__,
            "exitCode": int(self.exit_code),
        }
        if self.hints:
            data["hints"] = self.hints
        if self.details:
            data["details"] = self.details
        return data

    def __str__(self) -> str:
        return self.message


class NotFoundError(AnyListCliError):
    """A list or item could not be found by name."""

    def __init__(self, kind: str, name: str, **kwargs):
        super().__init__(f"{kind} not found: {name}", **kwargs)
        self.details.setdefault("kind", kind.lower())
        self.details.setdefault("name", name)


class ListNotFoundError(NotFoundError):
    """No list matches the requested name."""

    def __init__(self, name: str, **kwargs):
        super().__init__("List", name, **kwargs)


class ItemNotFoundError(NotFoundError):
    """No item in the list matches the requested name."""

    def __init__(self, name: str, **kwargs):
        super().__init__("Item", name, **kwargs)


class InvalidUsageError(AnyListCliError):
    """The command was invoked with invalid input."""

    exit_code = ExitCode.INVALID_USAGE


class UnknownCategoryError(InvalidUsageError):
    """A category name is not in the category table."""

    def __init__(self, category: str, available: List[str], **kwargs):
        super().__init__(
            f"Unknown category: {category}",
            hints=[f"Available categories: {', '.join(available)}"],
            **kwargs
        )
        self.details.setdefault("category", category)


class AuthenticationError(AnyListCliError):
    """Logging in to AnyList failed."""

    exit_code = ExitCode.AUTH_FAILURE

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, **kwargs)


class NotAuthenticatedError(AuthenticationError):
    """No credentials are available from the environment or config file."""

    def __init__(self, **kwargs):
        kwargs.setdefault("hints", [
            "Or set ANYLIST_EMAIL and ANYLIST_PASSWORD environment variables.",
        ])
        super().__init__("Not authenticated. Run: anylist auth", **kwargs)


class ClientUnavailableError(AnyListCliError):
    """No AnyList client library could be loaded."""

    def __init__(self, message: str = "No AnyList client library is available", **kwargs):
        kwargs.setdefault("hints", [
            "Install a package providing the 'anylist_cli.clients' entry point, "
            "or set ANYLIST_CLIENT=module:attribute.",
        ])
        super().__init__(message, **kwargs)


def wrap_error(error: Exception) -> AnyListCliError:
    """Convert an arbitrary exception into an AnyListCliError.

    Args:
        error: Exception raised by the client library or the CLI itself

    Returns:
        The error unchanged if already structured, otherwise a generic failure
    """
    if isinstance(error, AnyListCliError):
        return error

    message = str(error) or error.__class__.__name__
    logger.debug(f"Wrapping unexpected {error.__class__.__name__}: {message}")
    return AnyListCliError(message, original_error=error)
