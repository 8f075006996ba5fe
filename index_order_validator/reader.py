# index_order_validator/reader.py
"""Columnar file reading as a single, in-file-order stream of record batches."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

import pyarrow as pa
import pyarrow.parquet as pq

from index_order_validator.errors import ParquetReadError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 4096

_READ_ERRORS = (pa.ArrowException, OSError)


class BatchReader(Protocol):
    """Opens a local columnar file as one lazy sequence of record batches."""

    def open_for_read(self, local_path: Path | str) -> Iterator[pa.RecordBatch]:
        """Yield batches in file order; must not split the file into parallel streams."""
        ...


class ParquetBatchReader:
    """Streams parquet row groups with ``ParquetFile.iter_batches``.

    Memory is O(batch_size) per yielded batch; nothing is read until iteration.
    """

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size

    def open_for_read(self, local_path: Path | str) -> Iterator[pa.RecordBatch]:
        path = str(local_path)
        try:
            pf = pq.ParquetFile(path)
        except _READ_ERRORS as e:
            raise ParquetReadError(path, f"{type(e).__name__}: {e}") from e

        logger.debug(
            "Opened %s: %d rows in %d row groups",
            path,
            pf.metadata.num_rows,
            pf.metadata.num_row_groups,
        )
        return self._iter_batches(pf, path)

    def _iter_batches(self, pf: pq.ParquetFile, path: str) -> Iterator[pa.RecordBatch]:
        batches = pf.iter_batches(batch_size=self.batch_size)
        while True:
            try:
                batch = next(batches)
            except StopIteration:
                return
            except _READ_ERRORS as e:
                raise ParquetReadError(path, f"{type(e).__name__}: {e}") from e
            yield batch
