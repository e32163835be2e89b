"""Shared utilities: structured logging."""

from upsert_builder.utils.logging import get_logger, sanitize_for_logging

__all__ = [
    "get_logger",
    "sanitize_for_logging",
]
