"""SQL dialects."""

from .standard import StandardDialect

__all__ = ["StandardDialect"]
