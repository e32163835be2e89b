"""SQL statement operations: upsert building, value extraction and deduplication."""

from .upsert import (
    UpsertBuilder,
    UpsertConfig,
    UpsertOption,
    build_upsert_sql,
    with_columns,
    with_non_primary_keys,
    with_on_duplicate_error,
    with_on_duplicate_skip,
    with_placeholder,
    with_primary_keys,
    with_skip_observer,
    with_table_name,
)
from .values import classify_input, collect_rows, extract_values, key_signature

__all__ = [
    "UpsertBuilder",
    "UpsertConfig",
    "UpsertOption",
    "build_upsert_sql",
    "with_columns",
    "with_non_primary_keys",
    "with_on_duplicate_error",
    "with_on_duplicate_skip",
    "with_placeholder",
    "with_primary_keys",
    "with_skip_observer",
    "with_table_name",
    "classify_input",
    "collect_rows",
    "extract_values",
    "key_signature",
]
