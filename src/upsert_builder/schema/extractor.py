"""
Field metadata extraction for record types.

Record types declare their column mapping next to each field, the same way a
struct tag would:

    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Person:
    ...     id: str = field(metadata={"db": "id,primary"})
    ...     name: str = field(metadata={"db": "name"})
    >>> derive_metadata(Person).primary_key_columns
    ('id',)

Pydantic models carry the same annotation in ``json_schema_extra``:

    >>> class Person(BaseModel):
    ...     id: str = Field(json_schema_extra={"db": "id,primary"})

Callers that prefer not to rely on introspection can pass an explicit
sequence of ``ColumnDescriptor`` objects together with a table name.
"""

from __future__ import annotations

import dataclasses
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from upsert_builder.exceptions import BuilderConfigurationError
from upsert_builder.schema.core import ColumnDescriptor, TableMetadata
from upsert_builder.utils.logging import get_logger

logger = get_logger(__name__)


def parse_annotation(
    annotation: str,
    primary_marker: str = "primary",
    marker_match: str = "substring",
) -> Tuple[str, bool]:
    """
    Split a column annotation into its column name and primary-key flag.

    Args:
        annotation: Raw annotation, e.g. ``"id,primary"`` or ``"name"``
        primary_marker: Token that marks a primary-key column
        marker_match: ``"substring"`` flags any annotation containing the marker;
            ``"token"`` compares the comma-separated options exactly

    Returns:
        Tuple of (column name, is primary key)

    Examples:
        >>> parse_annotation("id,primary")
        ('id', True)
        >>> parse_annotation("is_primary_admin")
        ('is_primary_admin', True)
        >>> parse_annotation("is_primary_admin", marker_match="token")
        ('is_primary_admin', False)
    """
    parts = annotation.split(",")
    name = parts[0]
    if marker_match == "substring":
        return name, primary_marker in annotation
    if marker_match != "token":
        raise BuilderConfigurationError(f"unknown marker match mode: {marker_match!r}")
    return name, primary_marker in (p.strip() for p in parts[1:])


def _model_class(model: Any) -> type:
    return model if isinstance(model, type) else type(model)


def _dataclass_annotations(cls: type, tag_key: str) -> List[Tuple[str, str]]:
    return [(f.name, str(f.metadata.get(tag_key, ""))) for f in dataclasses.fields(cls)]


def _pydantic_annotations(cls: type, tag_key: str) -> List[Tuple[str, str]]:
    pairs = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra
        annotation = extra.get(tag_key, "") if isinstance(extra, dict) else ""
        pairs.append((name, str(annotation)))
    return pairs


def derive_metadata(
    model: Any,
    *,
    table_name: Optional[str] = None,
    tag_key: str = "db",
    primary_marker: str = "primary",
    marker_match: str = "substring",
) -> TableMetadata:
    """
    Derive the column layout of a record type.

    Args:
        model: A dataclass or pydantic model (class or instance), or a
            sequence of ``ColumnDescriptor`` objects
        table_name: Explicit table name; defaults to the lower-cased class name,
            or to an empty string for descriptor sequences
        tag_key: Metadata key holding the column annotation
        primary_marker: Annotation token marking a primary key
        marker_match: ``"substring"`` or ``"token"`` (see ``parse_annotation``)

    Returns:
        TableMetadata with descriptors in declaration order

    Raises:
        BuilderConfigurationError: If the model kind is not supported
    """
    if isinstance(model, (list, tuple)) and all(isinstance(d, ColumnDescriptor) for d in model):
        # No class name to fall back on; the caller supplies the table name
        descriptors: Sequence[ColumnDescriptor] = tuple(model)
        table_name = table_name or ""
    else:
        cls = _model_class(model)
        if dataclasses.is_dataclass(cls):
            pairs = _dataclass_annotations(cls, tag_key)
        elif issubclass(cls, BaseModel):
            pairs = _pydantic_annotations(cls, tag_key)
        else:
            raise BuilderConfigurationError(
                f"cannot derive columns from {cls.__name__}: expected a dataclass or pydantic model"
            )

        descriptors = tuple(
            ColumnDescriptor(field_name, *parse_annotation(annotation, primary_marker, marker_match))
            for field_name, annotation in pairs
        )
        table_name = table_name or cls.__name__.lower()

    metadata = TableMetadata(table_name=table_name, descriptors=tuple(descriptors))
    logger.debug(
        "upsert.metadata.derived",
        table=metadata.table_name,
        columns=list(metadata.columns),
        primary_keys=list(metadata.primary_key_columns),
    )
    return metadata


__all__ = [
    "parse_annotation",
    "derive_metadata",
]
