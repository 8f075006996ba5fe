# index_order_validator/lookahead.py
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")

_EMPTY = object()


class Lookahead(Generic[T]):
    """Iterator wrapper with a single-item lookahead buffer.

    ``peek()`` pulls at most one element ahead of what ``next()`` has returned,
    so at most one extra item is held in memory.
    """

    def __init__(self, iterable: Iterable[T]) -> None:
        self._it: Iterator[T] = iter(iterable)
        self._buffered: object = _EMPTY

    def __iter__(self) -> Lookahead[T]:
        return self

    def __next__(self) -> T:
        if self._buffered is not _EMPTY:
            item = self._buffered
            self._buffered = _EMPTY
            return item  # type: ignore[return-value]
        return next(self._it)

    def peek(self, default: T | None = None) -> T | None:
        """Return the next item without consuming it, or ``default`` when exhausted."""
        if self._buffered is _EMPTY:
            try:
                self._buffered = next(self._it)
            except StopIteration:
                return default
        return self._buffered  # type: ignore[return-value]

    def has_next(self) -> bool:
        return self.peek(_EMPTY) is not _EMPTY  # type: ignore[arg-type]
