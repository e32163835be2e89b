"""
Row value extraction and batch deduplication.

Turns record instances into placeholder groups plus a flat positional argument
list, enforcing primary-key uniqueness across a batch according to the
configured duplicate policy.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, List, Sequence, Tuple

import pandas as pd
from pydantic import BaseModel

from upsert_builder.exceptions import (
    DuplicateKeyError,
    NilCollectionError,
    NilInputError,
    UnsupportedInputKind,
)
from upsert_builder.schema.core import DuplicatePolicy
from upsert_builder.sql.core.parameters import render_values_tuple
from upsert_builder.utils.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from upsert_builder.sql.operations.upsert import UpsertConfig

logger = get_logger(__name__)


def is_record(value: Any) -> bool:
    """Return True for a dataclass instance, pydantic model instance or mapping."""
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or isinstance(value, (BaseModel, Mapping))


def classify_input(records: Any) -> Tuple[bool, List[Any]]:
    """
    Normalize upsert input into a list of records.

    Args:
        records: A single record, a list/tuple of records, or a DataFrame

    Returns:
        Tuple of (is_batch, records as a list)

    Raises:
        NilInputError: If ``records`` is None
        NilCollectionError: If a batch holds a None entry
        UnsupportedInputKind: If the input, or a batch entry, is not a record
    """
    if records is None:
        raise NilInputError()

    if isinstance(records, pd.DataFrame):
        # Missing cells (NaN, NaT, pd.NA) bind as NULL
        frame = records.astype(object).where(records.notna(), None)
        return True, frame.to_dict(orient="records")

    if isinstance(records, (list, tuple)):
        for i, record in enumerate(records):
            if record is None:
                raise NilCollectionError(row_index=i)
            if not is_record(record):
                raise UnsupportedInputKind(type(record).__name__)
        return True, list(records)

    if is_record(records):
        return False, [records]

    raise UnsupportedInputKind(type(records).__name__)


def extract_values(record: Any, fields: Sequence[str]) -> List[Any]:
    """
    Read a record's field values in declaration order.

    Absent optional values stay ``None`` so they bind as SQL NULL rather than
    a zero value.
    """
    if isinstance(record, Mapping):
        return [record[f] for f in fields]
    return [getattr(record, f) for f in fields]


def key_signature(values: Sequence[Any], primary_key_index: Sequence[int], separator: str = "-") -> str:
    """
    Join the primary-key values of one row into a comparable token.

    Values are compared as text, so ``None`` and ``"None"`` share a signature.

    Examples:
        >>> key_signature(["1001", "Tom", 7], [0, 2])
        '1001-7'
    """
    return separator.join(str(values[i]) for i in primary_key_index)


def collect_rows(records: Sequence[Any], config: "UpsertConfig", is_batch: bool = True) -> Tuple[List[str], List[Any]]:
    """
    Render placeholder groups and flatten arguments for every emitted row.

    Rows are processed in input order. Under ``DuplicatePolicy.ERROR`` a
    repeated key signature aborts the whole call; under ``SKIP`` the later
    row is dropped and the first occurrence kept.

    Args:
        records: Records already normalized by ``classify_input``
        config: Builder configuration
        is_batch: False for single-record input, which skips deduplication

    Returns:
        Tuple of (placeholder groups, flattened arguments)

    Raises:
        DuplicateKeyError: On a repeated signature under the ERROR policy
    """
    rows: List[str] = []
    args: List[Any] = []
    seen = set()
    group = render_values_tuple(len(config.fields), config.placeholder)

    for i, record in enumerate(records):
        values = extract_values(record, config.fields)

        if is_batch:
            signature = key_signature(values, config.primary_key_index, config.key_separator)
            if signature in seen:
                if config.duplicate_policy is DuplicatePolicy.ERROR:
                    logger.warning(
                        "upsert.duplicate.rejected",
                        table=config.table_name,
                        signature=signature,
                        row_index=i,
                    )
                    raise DuplicateKeyError(signature, values, row_index=i)

                logger.debug(
                    "upsert.duplicate.skipped",
                    table=config.table_name,
                    signature=signature,
                    row_index=i,
                    values=values,
                )
                if config.on_skip is not None:
                    config.on_skip(signature, values)
                continue
            seen.add(signature)

        rows.append(group)
        args.extend(values)

    return rows, args


__all__ = [
    "is_record",
    "classify_input",
    "extract_values",
    "key_signature",
    "collect_rows",
]
