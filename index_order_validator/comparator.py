# index_order_validator/comparator.py
"""Lexicographic comparison of composite sort keys across pyarrow columns.

Temporal columns (timestamp, date, time, duration) are compared by their
physical integer value, never through Python datetime objects, so nanosecond
precision is kept. Nested types (list, struct, map, union) are not orderable.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import IntEnum
from typing import Any

import pyarrow as pa

__all__ = ["Ordering", "check_key_type", "compare_rows", "display_row"]


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _value_type(t: pa.DataType) -> pa.DataType:
    return t.value_type if pa.types.is_dictionary(t) else t


def check_key_type(t: pa.DataType) -> None:
    """Raise TypeError if values of type ``t`` cannot be ordered."""
    if pa.types.is_nested(_value_type(t)):
        raise TypeError(f"Nested type {t} is not supported as a sort key column")


def _scalar_value(scalar: pa.Scalar) -> Any:
    if not scalar.is_valid:
        return None
    if isinstance(scalar, pa.DictionaryScalar):
        scalar = scalar.value
    if pa.types.is_temporal(scalar.type):
        return scalar.value
    return scalar.as_py()


def _compare_values(left: Any, right: Any) -> Ordering:
    # Nulls first, NaN last: a total order over what parquet can hold.
    if left is None or right is None:
        if left is None and right is None:
            return Ordering.EQUAL
        return Ordering.LESS if left is None else Ordering.GREATER
    if _is_nan(left) or _is_nan(right):
        if _is_nan(left) and _is_nan(right):
            return Ordering.EQUAL
        return Ordering.GREATER if _is_nan(left) else Ordering.LESS
    if left < right:
        return Ordering.LESS
    if left > right:
        return Ordering.GREATER
    return Ordering.EQUAL


def compare_rows(
    left_columns: Sequence[pa.Array],
    left_row: int,
    right_columns: Sequence[pa.Array],
    right_row: int,
) -> Ordering:
    """
    Compare the composite key at ``left_row`` with the one at ``right_row``.

    Columns are compared in order and the first non-equal column decides.

    Raises:
        ValueError: If the two column lists differ in length.
        TypeError: If a pair of corresponding columns differs in type, or a column is nested.
    """
    if len(left_columns) != len(right_columns):
        raise ValueError(
            f"Key column count mismatch: {len(left_columns)} vs {len(right_columns)}"
        )

    for i, (left, right) in enumerate(zip(left_columns, right_columns)):
        if left.type != right.type:
            raise TypeError(f"Key column {i} type mismatch: {left.type} vs {right.type}")
        check_key_type(left.type)
        order = _compare_values(_scalar_value(left[left_row]), _scalar_value(right[right_row]))
        if order != Ordering.EQUAL:
            return order
    return Ordering.EQUAL


def _display_cell(col: pa.Array) -> list[Any]:
    t = _value_type(col.type)
    if pa.types.is_dictionary(col.type):
        col = col.dictionary_decode()
    if pa.types.is_duration(t):
        return [None if v is None else f"{v}{t.unit}" for v in col.view(pa.int64()).to_pylist()]
    if pa.types.is_temporal(t):
        return col.cast(pa.string()).to_pylist()
    return col.to_pylist()


def display_row(columns: Sequence[pa.Array], row: int) -> str:
    """Render one row of the key columns, each column's one-row slice on its own."""
    return "[" + ", ".join(str(_display_cell(col.slice(row, 1))) for col in columns) + "]"
