"""Patchx settings."""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the command line front end.

    Read from ``PATCHX_*`` environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PATCHX_", env_file=".env", extra="ignore"
    )

    indent: int | None = 2
    """Indentation of the JSON written by the CLI; ``None`` for compact output."""

    ensure_ascii: bool = False
    """Escape non-ASCII characters in the JSON written by the CLI."""

    log_level: str = "WARNING"
    """Level passed to ``logging.basicConfig`` by the CLI."""

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {v!r}")
        return level


settings = Settings()
