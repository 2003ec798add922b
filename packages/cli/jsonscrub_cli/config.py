"""
jsonscrub_cli.config
~~~~~~~~~~~~~~~~~~~~
Settings for the ``jsonscrub`` command, read from ``JSONSCRUB_*``
environment variables (or a ``.env`` file).
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonscrub_core import DEFAULT_BUFFER_SIZE, SeparatorStyle


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JSONSCRUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Replacement text written for masked values
    MASK: str = "REDACTED"

    # Output
    STYLE: SeparatorStyle = SeparatorStyle.COMPACT
    BUFFER_SIZE: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)

    # Observability
    LOG_LEVEL: str = "WARNING"


def load_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings()
