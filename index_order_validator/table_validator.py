# index_order_validator/table_validator.py
"""
Table-level orchestration: enumerate every file of every index and validate each one.

Traversal is strictly sequential and fail-fast. The first error of any kind
(catalog lookup, materialization, read, or sort violation) propagates to the
caller and nothing after it is visited.

Each file is checked as an independent sequence: there is no continuity check
between a partition file and its chunk files, or between chunks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from index_order_validator.catalog import Catalog
from index_order_validator.materializer import FileMaterializer
from index_order_validator.models import Index, PartitionWithChunks
from index_order_validator.order_validator import validate_chunk
from index_order_validator.reader import BatchReader

logger = logging.getLogger(__name__)

__all__ = ["iter_index_files", "validate_index", "validate_table"]


def iter_index_files(partitions: Sequence[PartitionWithChunks]) -> Iterator[str]:
    """Yield file names in validation order: each partition file, then its chunks."""
    for partition, chunks in partitions:
        file_name = partition.file_name()
        if file_name is not None:
            yield file_name
        for chunk in chunks:
            yield chunk.file_name()


def validate_index(
    index: Index,
    partitions: Sequence[PartitionWithChunks],
    fs: FileMaterializer,
    reader: BatchReader,
) -> None:
    logger.info("Validating index %d: %s", index.id, index.name)
    for file_name in iter_index_files(partitions):
        local_path = fs.local_file(file_name)
        validate_chunk(local_path, index.sort_key_size, reader)
    logger.info("Index ok")


def validate_table(
    schema: str,
    table: str,
    catalog: Catalog,
    fs: FileMaterializer,
    reader: BatchReader,
) -> None:
    """
    Validate physical sort order of every active file of every index of ``schema.table``.

    Raises:
        NotFoundError: If the table is not in the catalog.
        MaterializationError: If a file cannot be made available locally.
        ParquetReadError: If a file cannot be decoded.
        UnsortedDataError: On the first sort violation found.
    """
    t = catalog.get_table(schema, table)
    indexes = catalog.get_table_indexes(t.id)
    partitions = catalog.get_active_partitions_and_chunks([i.id for i in indexes])

    for index, index_partitions in zip(indexes, partitions, strict=True):
        validate_index(index, index_partitions, fs, reader)
