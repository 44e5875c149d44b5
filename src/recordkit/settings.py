"""
Configuration settings for recordkit.

Uses Pydantic Settings to load ``RECORDKIT_``-prefixed environment variables
(and an optional ``.env`` file) controlling logging and schema validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for recordkit."""

    # Logging
    log_level: str = Field("WARNING", description="Level used by the CLI logging configuration.")
    json_logs: bool = Field(False, description="Emit CLI logs as JSON lines.")

    # Schema validation
    reject_mutable_defaults: bool = Field(
        True,
        description="Reject unhashable literal defaults (list, dict, set, ...) at schema definition time.",
    )

    model_config = SettingsConfigDict(
        env_prefix="RECORDKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retrieve a cached instance of Settings to avoid repeated env parsing."""
    return Settings()


__all__ = ["Settings", "get_settings"]
