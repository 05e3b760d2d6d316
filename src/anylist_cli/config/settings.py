"""
Configuration settings for anylist-cli.

This module provides runtime configuration using Pydantic settings, read
from ANYLIST_* environment variables and an optional .env file.
"""

from typing import Optional
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnyListSettings(BaseSettings):
    """
    Runtime settings for anylist-cli.

    Settings are loaded from multiple sources in order of preference:
    1. Environment variables (prefixed with ANYLIST_)
    2. A .env file in the working directory
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ANYLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials that take precedence over the stored config file
    email: Optional[str] = Field(
        default=None,
        description="AnyList account email"
    )

    password: Optional[str] = Field(
        default=None,
        description="AnyList account password"
    )

    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "anylist-cli",
        description="Directory holding the credential file"
    )

    # The client library keeps its own session cache here; logout removes it
    library_credentials_file: Path = Field(
        default_factory=lambda: Path.home() / ".anylist_credentials",
        description="Credential cache written by the AnyList client library"
    )

    client: Optional[str] = Field(
        default=None,
        description="Client factory as 'module:attribute'"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(valid_levels))}")
        return v_upper

    @field_validator("client")
    @classmethod
    def validate_client(cls, v: Optional[str]) -> Optional[str]:
        """Validate the client factory path."""
        if v is None or not v.strip():
            return None
        module, sep, attr = v.strip().partition(":")
        if not sep or not module or not attr:
            raise ValueError(f"Invalid client '{v}'. Expected 'module:attribute'")
        return v.strip()

    @property
    def config_file_path(self) -> Path:
        """Path to the credential file."""
        return self.config_dir / "config.json"

    @property
    def has_env_credentials(self) -> bool:
        """Both email and password are supplied by the environment."""
        return bool(self.email) and bool(self.password)


def get_settings() -> AnyListSettings:
    """Get the current anylist-cli settings."""
    return AnyListSettings()
