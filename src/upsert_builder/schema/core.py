"""Core column metadata types for upsert statement generation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class DuplicatePolicy(Enum):
    """How a batch treats rows that repeat an earlier primary-key signature."""

    ERROR = "error"
    SKIP = "skip"


@dataclass(frozen=True)
class ColumnDescriptor:
    """One record field mapped to a table column."""

    field: str
    name: str
    primary_key: bool = False


@dataclass(frozen=True)
class TableMetadata:
    """Column layout derived from a record type, in declaration order."""

    table_name: str
    descriptors: Tuple[ColumnDescriptor, ...]

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(d.field for d in self.descriptors)

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self.descriptors)

    @property
    def primary_key_columns(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self.descriptors if d.primary_key)

    @property
    def primary_key_index(self) -> Tuple[int, ...]:
        return tuple(i for i, d in enumerate(self.descriptors) if d.primary_key)

    @property
    def non_primary_key_columns(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self.descriptors if not d.primary_key)


__all__ = [
    "DuplicatePolicy",
    "ColumnDescriptor",
    "TableMetadata",
]
