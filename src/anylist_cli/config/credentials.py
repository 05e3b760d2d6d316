"""
Local credential storage for anylist-cli.

Credentials are kept as plaintext JSON in the user's config directory with
owner-only permissions. Environment credentials take precedence.
"""

import json
import os
from pathlib import Path
from typing import List, Optional, Tuple
import logging

from pydantic import BaseModel, ValidationError

from anylist_cli.config.settings import AnyListSettings
from anylist_cli.core.errors import NotAuthenticatedError

logger = logging.getLogger(__name__)

CONFIG_FILE_MODE = 0o600
CONFIG_DIR_MODE = 0o700


class Credentials(BaseModel):
    """An AnyList account email and password."""

    email: str
    password: str

    @property
    def is_complete(self) -> bool:
        return bool(self.email) and bool(self.password)


class CredentialStore:
    """Reads and writes the credential file."""

    def __init__(self, path: Path, library_credentials_file: Optional[Path] = None):
        """Initialize the store.

        Args:
            path: Location of the JSON credential file
            library_credentials_file: Credential cache of the client library,
                removed together with our own file on clear()
        """
        self.path = Path(path)
        self.library_credentials_file = library_credentials_file

    @classmethod
    def from_settings(cls, settings: AnyListSettings) -> "CredentialStore":
        return cls(settings.config_file_path, settings.library_credentials_file)

    def load(self) -> Optional[Credentials]:
        """Load credentials from the file.

        Returns:
            Stored credentials, or None if the file is missing or unreadable
        """
        if not self.path.exists():
            logger.debug(f"Credential file not found: {self.path}")
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Credentials.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable credential file {self.path}: {e}")
            return None

    def save(self, credentials: Credentials) -> Path:
        """Overwrite the credential file.

        Returns:
            Path of the written file
        """
        self.path.parent.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)

        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(credentials.model_dump(), f, indent=2)
        # O_CREAT only applies the mode to new files
        os.chmod(self.path, CONFIG_FILE_MODE)

        logger.info(f"Saved credentials to {self.path}")
        return self.path

    def clear(self) -> List[Path]:
        """Delete stored credentials.

        Returns:
            Paths that were removed
        """
        removed = []
        for path in (self.path, self.library_credentials_file):
            if path is not None and path.exists():
                path.unlink()
                removed.append(path)
                logger.info(f"Removed {path}")
        return removed


def resolve_credentials_with_source(
    settings: AnyListSettings,
    store: CredentialStore,
) -> Tuple[Optional[Credentials], Optional[str]]:
    """Find credentials and report where they came from.

    Returns:
        (credentials, source) where source is "environment" or "config",
        or (None, None) when nothing usable is configured
    """
    if settings.has_env_credentials:
        return Credentials(email=settings.email, password=settings.password), "environment"

    stored = store.load()
    if stored is not None and stored.is_complete:
        return stored, "config"

    return None, None


def resolve_credentials(settings: AnyListSettings, store: CredentialStore) -> Credentials:
    """Get credentials, preferring the environment over the config file.

    Raises:
        NotAuthenticatedError: If neither source supplies both fields
    """
    credentials, source = resolve_credentials_with_source(settings, store)
    if credentials is None:
        raise NotAuthenticatedError()
    logger.debug(f"Using credentials from {source}")
    return credentials
