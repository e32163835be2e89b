"""
SQL module for upsert statement generation.

This module provides placeholder rendering, the statement dialect and the
high-level ``UpsertBuilder``.
"""

from .core.parameters import build_placeholders, render_values_tuple
from .dialects.standard import StandardDialect
from .operations.upsert import UpsertBuilder, UpsertConfig, build_upsert_sql

__all__ = [
    "build_placeholders",
    "render_values_tuple",
    "StandardDialect",
    "UpsertBuilder",
    "UpsertConfig",
    "build_upsert_sql",
]
