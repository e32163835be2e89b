"""
Upsert statement builder.

Derives column metadata once per record type and turns single records or
batches into ``INSERT ... ON CONFLICT ... DO UPDATE`` statements with a flat
positional argument list.

Example:
    >>> @dataclass
    ... class Person:
    ...     id: str = field(metadata={"db": "id,primary"})
    ...     name: str = field(metadata={"db": "name"})
    >>> builder = UpsertBuilder(Person)
    >>> sql, args = builder.build_upsert(Person(id="1001", name="Tom"))
    >>> print(sql)
    INSERT INTO person (id, name) VALUES (?, ?)
    ON CONFLICT (id) DO UPDATE SET name = excluded.name
    >>> args
    ['1001', 'Tom']
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from upsert_builder.config import Settings, get_settings
from upsert_builder.exceptions import BuilderConfigurationError, EmptyBatchError
from upsert_builder.schema.core import DuplicatePolicy
from upsert_builder.schema.extractor import derive_metadata
from upsert_builder.sql.dialects.standard import StandardDialect
from upsert_builder.sql.operations.values import classify_input, collect_rows
from upsert_builder.utils.logging import get_logger

logger = get_logger(__name__)

SkipObserver = Callable[[str, List[Any]], None]


@dataclass(frozen=True)
class UpsertConfig:
    """Immutable builder configuration, shared read-only across calls."""

    table_name: str
    fields: Tuple[str, ...]
    columns: Tuple[str, ...]
    primary_key_columns: Tuple[str, ...]
    primary_key_index: Tuple[int, ...]
    non_primary_key_columns: Tuple[str, ...]
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR
    placeholder: str = "?"
    key_separator: str = "-"
    on_skip: Optional[SkipObserver] = None


UpsertOption = Callable[[UpsertConfig], UpsertConfig]


def with_table_name(table_name: str) -> UpsertOption:
    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, table_name=table_name)

    return apply


def with_primary_keys(columns: Sequence[str]) -> UpsertOption:
    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, primary_key_columns=tuple(columns))

    return apply


def with_non_primary_keys(columns: Sequence[str]) -> UpsertOption:
    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, non_primary_key_columns=tuple(columns))

    return apply


def with_columns(columns: Sequence[str]) -> UpsertOption:
    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, columns=tuple(columns))

    return apply


def with_on_duplicate_skip() -> UpsertOption:
    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, duplicate_policy=DuplicatePolicy.SKIP)

    return apply


def with_on_duplicate_error() -> UpsertOption:
    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, duplicate_policy=DuplicatePolicy.ERROR)

    return apply


def with_placeholder(placeholder: str) -> UpsertOption:
    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, placeholder=placeholder)

    return apply


def with_skip_observer(observer: SkipObserver) -> UpsertOption:
    """Call ``observer(signature, args)`` for every row dropped under the SKIP policy."""

    def apply(config: UpsertConfig) -> UpsertConfig:
        return dataclasses.replace(config, on_skip=observer)

    return apply


def _reconcile(derived: UpsertConfig, config: UpsertConfig) -> UpsertConfig:
    """
    Validate an option-adjusted configuration and re-derive the key index.

    The primary-key index is recomputed from ``columns`` whenever columns or
    primary keys were overridden, so it always points at the key positions of
    the configuration actually in use. When only the keys or columns were
    overridden, the non-key columns are re-derived as every remaining column.
    Afterwards each column must sit in exactly one of the two partitions.
    """
    if not config.table_name:
        raise BuilderConfigurationError("table name is required")
    if not config.placeholder:
        raise BuilderConfigurationError("placeholder must not be empty")
    if len(config.columns) != len(config.fields):
        raise BuilderConfigurationError(
            f"{len(config.columns)} columns configured for {len(config.fields)} record fields"
        )

    if config.columns == derived.columns and config.primary_key_columns == derived.primary_key_columns:
        index = config.primary_key_index
    else:
        positions = []
        for column in config.primary_key_columns:
            if column not in config.columns:
                raise BuilderConfigurationError(f"primary key column {column!r} is not in columns")
            positions.append(config.columns.index(column))
        index = tuple(positions)

        if config.non_primary_key_columns == derived.non_primary_key_columns:
            remaining = tuple(c for c in config.columns if c not in config.primary_key_columns)
            config = dataclasses.replace(config, non_primary_key_columns=remaining)

    for column in config.non_primary_key_columns:
        if column not in config.columns:
            raise BuilderConfigurationError(f"update column {column!r} is not in columns")
        if column in config.primary_key_columns:
            raise BuilderConfigurationError(f"column {column!r} is both a primary key and an update column")

    for column in config.columns:
        if column not in config.primary_key_columns and column not in config.non_primary_key_columns:
            raise BuilderConfigurationError(f"column {column!r} is neither a primary key nor an update column")

    return dataclasses.replace(config, primary_key_index=index)


class UpsertBuilder:
    """
    Builder for INSERT ... ON CONFLICT DO UPDATE statements of one record type.

    Args:
        model: Dataclass or pydantic model (class or sample instance), or a
            sequence of ``ColumnDescriptor`` objects
        *options: Option callables applied in order, later ones winning
        settings: Settings supplying defaults; ``get_settings()`` when omitted
        dialect: Statement renderer; ``StandardDialect`` when omitted
    """

    def __init__(
        self,
        model: Any,
        *options: UpsertOption,
        settings: Optional[Settings] = None,
        dialect: Optional[StandardDialect] = None,
    ):
        settings = settings or get_settings()
        self.dialect = dialect or StandardDialect()

        metadata = derive_metadata(
            model,
            tag_key=settings.tag_key,
            primary_marker=settings.primary_marker,
            marker_match=settings.marker_match,
        )
        derived = UpsertConfig(
            table_name=metadata.table_name,
            fields=metadata.fields,
            columns=metadata.columns,
            primary_key_columns=metadata.primary_key_columns,
            primary_key_index=metadata.primary_key_index,
            non_primary_key_columns=metadata.non_primary_key_columns,
            duplicate_policy=DuplicatePolicy(settings.duplicate_policy),
            placeholder=settings.placeholder,
            key_separator=settings.key_separator,
        )

        config = derived
        for option in options:
            config = option(config)
        self.config = _reconcile(derived, config)

        if not self.config.primary_key_columns:
            logger.warning("upsert.builder.no_primary_key", table=self.config.table_name)
        logger.info(
            "upsert.builder.initialized",
            table=self.config.table_name,
            columns=list(self.config.columns),
            primary_keys=list(self.config.primary_key_columns),
            duplicate_policy=self.config.duplicate_policy.value,
        )

    @property
    def table_name(self) -> str:
        return self.config.table_name

    @property
    def columns(self) -> Tuple[str, ...]:
        return self.config.columns

    @property
    def primary_key_columns(self) -> Tuple[str, ...]:
        return self.config.primary_key_columns

    @property
    def primary_key_index(self) -> Tuple[int, ...]:
        return self.config.primary_key_index

    @property
    def non_primary_key_columns(self) -> Tuple[str, ...]:
        return self.config.non_primary_key_columns

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self.config.duplicate_policy

    def build_upsert(self, records: Any) -> Tuple[str, List[Any]]:
        """
        Build an upsert statement for one record or a batch.

        Args:
            records: A record, a list/tuple of records, or a DataFrame whose
                columns are the record field names

        Returns:
            Tuple of (sql_string, positional arguments aligned to placeholders)

        Raises:
            NilInputError: If ``records`` is None
            NilCollectionError: If a batch contains None
            UnsupportedInputKind: If the input is not a record or batch
            EmptyBatchError: If the batch has no records
            DuplicateKeyError: On a repeated key under the ERROR policy
        """
        is_batch, items = classify_input(records)
        if not items:
            raise EmptyBatchError()

        rows, args = collect_rows(items, self.config, is_batch=is_batch)
        sql = self.dialect.build_insert_on_conflict_do_update(
            self.config.table_name,
            self.config.columns,
            rows,
            self.config.primary_key_columns,
            self.config.non_primary_key_columns,
        )

        logger.debug(
            "upsert.statement.built",
            table=self.config.table_name,
            rows=len(rows),
            skipped=len(items) - len(rows),
            params=len(args),
        )
        return sql, args


def build_upsert_sql(model: Any, records: Any, *options: UpsertOption) -> Tuple[str, List[Any]]:
    """
    One-shot helper: build a throwaway ``UpsertBuilder`` and render ``records``.

    Prefer keeping an ``UpsertBuilder`` around when the same record type is
    upserted repeatedly.
    """
    return UpsertBuilder(model, *options).build_upsert(records)


__all__ = [
    "UpsertConfig",
    "UpsertOption",
    "UpsertBuilder",
    "build_upsert_sql",
    "with_table_name",
    "with_primary_keys",
    "with_non_primary_keys",
    "with_columns",
    "with_on_duplicate_skip",
    "with_on_duplicate_error",
    "with_placeholder",
    "with_skip_observer",
]
