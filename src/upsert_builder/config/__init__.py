"""Configuration management for upsert-builder.

Usage:
    >>> from upsert_builder.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.placeholder)
"""

from upsert_builder.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
