# index_order_validator/order_validator.py
"""
Streaming sort-order check for a single columnar file.

Rows must be non-decreasing by the composite key formed from the first
``key_len`` columns, both inside each record batch and across consecutive
batches. Empty batches are dropped before any comparison, so the boundary
check always pairs the nearest non-empty batches.

Memory: at most the current batch plus one peeked batch are held at a time,
regardless of file size.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pyarrow as pa

from index_order_validator.comparator import Ordering, check_key_type, compare_rows, display_row
from index_order_validator.errors import KeyTypeError, KeyWidthError, UnsortedDataError
from index_order_validator.lookahead import Lookahead
from index_order_validator.reader import BatchReader

logger = logging.getLogger(__name__)

__all__ = ["validate_batches", "validate_chunk"]


def _key_columns(batch: pa.RecordBatch, key_len: int, file: str) -> list[pa.Array]:
    if key_len > batch.num_columns:
        raise KeyWidthError(
            f"Sort key size {key_len} exceeds column count {batch.num_columns} in {file}"
        )
    key_cols = batch.columns[:key_len]
    for name, col in zip(batch.schema.names, key_cols):
        try:
            check_key_type(col.type)
        except TypeError as e:
            raise KeyTypeError(f"Key column {name!r} in {file}: {e}") from e
    return key_cols


def validate_batches(
    batches: Iterable[pa.RecordBatch],
    key_len: int,
    *,
    file: str = "<memory>",
) -> int:
    """
    Check that ``batches``, concatenated in order, are sorted by their first ``key_len`` columns.

    Args:
        batches: Record batches in file order. Consumed lazily.
        key_len: Number of leading columns forming the composite key. Zero always passes.
        file: Identifier used in diagnostics.

    Returns:
        Number of rows checked.

    Raises:
        UnsortedDataError: On the first row whose key is less than the previous row's.
        KeyWidthError: If ``key_len`` is negative or wider than a batch.
        KeyTypeError: If a key column has a nested type.
    """
    if key_len < 0:
        raise KeyWidthError(f"Sort key size must be >= 0, got {key_len}")

    pending = Lookahead(b for b in batches if b.num_rows != 0)
    offset = 0

    for batch in pending:
        key_cols = _key_columns(batch, key_len, file)
        n = batch.num_rows

        for i in range(1, n):
            if compare_rows(key_cols, i, key_cols, i - 1) == Ordering.LESS:
                prev_key = display_row(key_cols, i - 1)
                key = display_row(key_cols, i)
                logger.error("Unsorted data at row %d: %s and %s", i - 1, prev_key, key)
                raise UnsortedDataError(
                    file,
                    row=i,
                    file_row=offset + i,
                    previous_key=prev_key,
                    key=key,
                )

        nxt = pending.peek()
        if nxt is not None:
            next_cols = _key_columns(nxt, key_len, file)
            if compare_rows(next_cols, 0, key_cols, n - 1) == Ordering.LESS:
                prev_key = display_row(key_cols, n - 1)
                key = display_row(next_cols, 0)
                logger.error("Unsorted data between batches: %s and %s", prev_key, key)
                raise UnsortedDataError(
                    file,
                    row=0,
                    file_row=offset + n,
                    previous_key=prev_key,
                    key=key,
                    between_batches=True,
                )

        offset += n

    return offset


def validate_chunk(local_path: Path | str, key_len: int, reader: BatchReader) -> int:
    """Validate sort order inside one local file. Returns the number of rows checked."""
    # TODO: compare row counts and min/max keys against the catalog's partition statistics.
    file = str(local_path)
    logger.info("Validating file %s", file)
    rows = validate_batches(reader.open_for_read(local_path), key_len, file=file)
    logger.info("File ok")
    return rows
