"""
Record schema package.

Describes how record fields map onto table columns and derives that mapping
from dataclass or pydantic field annotations.
"""

from .core import ColumnDescriptor, DuplicatePolicy, TableMetadata
from .extractor import derive_metadata, parse_annotation

__all__ = [
    "ColumnDescriptor",
    "DuplicatePolicy",
    "TableMetadata",
    "derive_metadata",
    "parse_annotation",
]
