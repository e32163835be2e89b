"""
Configuration management for upsert-builder.

This module provides environment-based configuration using Pydantic BaseSettings,
so that builder defaults (placeholder marker, duplicate policy, annotation
grammar) and logging behavior can be tuned per deployment without code changes.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("UPSERT_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the UPSERT_ prefix. For example,
    UPSERT_PLACEHOLDER=%s switches every builder created afterwards to
    psycopg-style placeholders. LOG_LEVEL is read without prefix.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    # Logging output
    log_to_file: bool = Field(default=False, description="Also write logs to a daily file")
    log_file_dir: str = Field(default="logs", description="Directory for log files")
    log_row_values: bool = Field(
        default=False, description="Keep bound row values in duplicate events instead of redacting them"
    )

    # Statement rendering
    placeholder: str = Field(
        default="?", description="Positional placeholder marker written into VALUES tuples"
    )
    key_separator: str = Field(
        default="-", description="Separator used to join primary-key values into a signature"
    )

    # Annotation grammar
    tag_key: str = Field(default="db", description="Field metadata key holding the column annotation")
    primary_marker: str = Field(default="primary", description="Annotation token marking a primary key")
    marker_match: Literal["substring", "token"] = Field(
        default="substring",
        description="'substring' matches containment; 'token' matches the marker exactly",
    )

    # Batch behavior
    duplicate_policy: Literal["error", "skip"] = Field(
        default="error", description="Default handling of repeated primary keys in a batch"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case the level name so 'debug' and 'DEBUG' behave the same."""
        return value.upper()

    @field_validator("placeholder", "key_separator", "tag_key", "primary_marker")
    @classmethod
    def reject_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    model_config = SettingsConfigDict(
        env_prefix="UPSERT_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
