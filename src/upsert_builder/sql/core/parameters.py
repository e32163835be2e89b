"""
SQL parameter placeholder utilities.

Values are never interpolated into statement text; every value position is a
generic placeholder and the real values travel in a flat positional list.
"""

from typing import List

DEFAULT_PLACEHOLDER = "?"


def build_placeholders(count: int, placeholder: str = DEFAULT_PLACEHOLDER) -> List[str]:
    """
    Build a list of positional placeholders.

    Examples:
        >>> build_placeholders(3)
        ['?', '?', '?']
        >>> build_placeholders(2, "%s")
        ['%s', '%s']
    """
    return [placeholder] * count


def render_values_tuple(count: int, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """
    Render one parenthesized VALUES group.

    Examples:
        >>> render_values_tuple(2)
        '(?, ?)'
    """
    return "(" + ", ".join(build_placeholders(count, placeholder)) + ")"
