"""Core SQL utilities package."""

from .parameters import DEFAULT_PLACEHOLDER, build_placeholders, render_values_tuple

__all__ = [
    "DEFAULT_PLACEHOLDER",
    "build_placeholders",
    "render_values_tuple",
]
