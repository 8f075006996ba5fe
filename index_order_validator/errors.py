# index_order_validator/errors.py
"""Exceptions raised while validating index sort order.

Every error is terminal for a validation run: nothing here is retried and the
first one raised aborts the remaining traversal of indexes and files.
"""

from __future__ import annotations


class OrderValidationError(Exception):
    """Base class for all validator failures."""


class CatalogError(OrderValidationError):
    """Catalog metadata is unreadable or inconsistent."""


class NotFoundError(CatalogError):
    """Requested schema/table is absent from the catalog."""


class MaterializationError(OrderValidationError, OSError):
    """A file could not be made available on local storage."""


class ParquetReadError(OrderValidationError):
    """Columnar file content is malformed or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read parquet file {path}: {reason}")
        self.path = path
        self.reason = reason


class KeyWidthError(OrderValidationError):
    """Sort key width does not fit the columns present in the file."""


class KeyTypeError(OrderValidationError):
    """A sort key column has a type whose values cannot be ordered."""


class UnsortedDataError(OrderValidationError):
    """Rows are not non-decreasing by the composite sort key."""

    def __init__(
        self,
        file: str,
        *,
        row: int,
        file_row: int,
        previous_key: str,
        key: str,
        between_batches: bool = False,
    ) -> None:
        where = "between batches" if between_batches else f"at row {row}"
        super().__init__(
            f"unsorted data in {file} {where} (file row {file_row}): {previous_key} and {key}"
        )
        self.file = file
        self.row = row
        self.file_row = file_row
        self.previous_key = previous_key
        self.key = key
        self.between_batches = between_batches
