"""
Exception hierarchy for upsert statement generation.

Every failure raised by ``UpsertBuilder.build_upsert`` derives from
``UpsertBuilderError`` so callers can treat a whole call as failed with a
single ``except`` clause. No partial SQL is ever returned alongside an error.
"""

from typing import Any, List, Optional


class UpsertBuilderError(Exception):
    """Base exception for all upsert builder errors."""

    pass


class BuilderConfigurationError(UpsertBuilderError):
    """Raised when a model cannot be described or options leave an inconsistent state."""


class NilInputError(UpsertBuilderError):
    """Raised when ``None`` is passed where a record or batch is expected."""

    def __init__(self, message: str = "nil is not supported"):
        super().__init__(message)


class NilCollectionError(UpsertBuilderError):
    """
    Raised when a batch holds a ``None`` entry instead of a record.

    Args:
        message: Error description
        row_index: Position of the missing record inside the batch
    """

    def __init__(self, message: str = "nil record in batch is not supported", row_index: Optional[int] = None):
        self.row_index = row_index
        if row_index is not None:
            message = f"{message} (row_index={row_index})"
        super().__init__(message)


class UnsupportedInputKind(UpsertBuilderError):
    """Raised when the input is neither a record nor a batch of records."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"{kind} is not supported")


class EmptyBatchError(UpsertBuilderError):
    """Raised when a batch contains no records to upsert."""

    def __init__(self, message: str = "empty batch is not supported"):
        super().__init__(message)


class DuplicateKeyError(UpsertBuilderError):
    """
    Raised when two rows of one batch share a primary-key signature.

    Only raised under the ``ERROR`` duplicate policy; under ``SKIP`` the later
    row is dropped instead.

    Args:
        signature: Key signature shared by the colliding rows
        args: Bound values of the colliding (later) row
        row_index: Position of the colliding row in the batch (optional)
    """

    def __init__(
        self,
        signature: str,
        args: Optional[List[Any]] = None,
        row_index: Optional[int] = None,
    ):
        self.signature = signature
        self.row_args = list(args or [])
        self.row_index = row_index

        context_parts = [f"signature='{signature}'"]
        if row_index is not None:
            context_parts.append(f"row_index={row_index}")

        super().__init__(f"duplicate record found ({', '.join(context_parts)})")


__all__ = [
    "UpsertBuilderError",
    "BuilderConfigurationError",
    "NilInputError",
    "NilCollectionError",
    "UnsupportedInputKind",
    "EmptyBatchError",
    "DuplicateKeyError",
]
