"""
upsert-builder - INSERT ... ON CONFLICT statement generation for record types.

Column mappings are declared on dataclass or pydantic fields; the builder
turns single records or batches into one parameterized statement plus a flat
argument list, ready for any DB-API style ``execute``.
"""

__version__ = "0.1.0"

from upsert_builder.exceptions import (
    BuilderConfigurationError,
    DuplicateKeyError,
    EmptyBatchError,
    NilCollectionError,
    NilInputError,
    UnsupportedInputKind,
    UpsertBuilderError,
)
from upsert_builder.schema import ColumnDescriptor, DuplicatePolicy, derive_metadata
from upsert_builder.sql.operations import (
    UpsertBuilder,
    UpsertConfig,
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

__all__ = [
    "__version__",
    # Errors
    "UpsertBuilderError",
    "BuilderConfigurationError",
    "DuplicateKeyError",
    "EmptyBatchError",
    "NilCollectionError",
    "NilInputError",
    "UnsupportedInputKind",
    # Schema
    "ColumnDescriptor",
    "DuplicatePolicy",
    "derive_metadata",
    # Builder
    "UpsertBuilder",
    "UpsertConfig",
    "build_upsert_sql",
    "with_columns",
    "with_non_primary_keys",
    "with_on_duplicate_error",
    "with_on_duplicate_skip",
    "with_placeholder",
    "with_primary_keys",
    "with_skip_observer",
    "with_table_name",
]
