from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

import pyarrow as pa
import pytest

from index_order_validator.errors import NotFoundError
from index_order_validator.models import Index, PartitionWithChunks, Table


def make_batch(*columns: Sequence[object], types: Sequence[pa.DataType] | None = None) -> pa.RecordBatch:
    """Build a record batch from column value lists (names c0, c1, ...)."""
    if types is None:
        types = [pa.int64()] * len(columns)
    arrays = [pa.array(list(values), type=t) for values, t in zip(columns, types)]
    return pa.RecordBatch.from_arrays(arrays, names=[f"c{i}" for i in range(len(columns))])


class InMemoryCatalog:
    """Catalog test double; records every call."""

    def __init__(
        self,
        tables: Sequence[Table] = (),
        indexes: Sequence[Index] = (),
        partitions: dict[int, list[PartitionWithChunks]] | None = None,
    ) -> None:
        self.tables = list(tables)
        self.indexes = list(indexes)
        self.partitions = partitions or {}
        self.calls: list[tuple[str, object]] = []

    def get_table(self, schema: str, name: str) -> Table:
        self.calls.append(("get_table", (schema, name)))
        for t in self.tables:
            if t.schema_name == schema and t.table_name == name:
                return t
        raise NotFoundError(f"Table {schema}.{name} was not found")

    def get_table_indexes(self, table_id: int) -> list[Index]:
        self.calls.append(("get_table_indexes", table_id))
        return [i for i in self.indexes if i.table_id == table_id]

    def get_active_partitions_and_chunks(self, index_ids: Sequence[int]) -> list[list[PartitionWithChunks]]:
        self.calls.append(("get_active_partitions_and_chunks", list(index_ids)))
        return [self.partitions.get(i, []) for i in index_ids]


class InMemoryFiles:
    """Materializer and reader doubles over named in-memory batch lists."""

    def __init__(self, files: dict[str, list[pa.RecordBatch]]) -> None:
        self.files = files
        self.materialized: list[str] = []
        self.opened: list[str] = []

    def local_file(self, file_name: str) -> Path:
        self.materialized.append(file_name)
        return Path("/local") / file_name

    def open_for_read(self, local_path: Path | str) -> Iterator[pa.RecordBatch]:
        name = Path(local_path).name
        self.opened.append(name)
        return iter(self.files[name])


@pytest.fixture()
def sorted_batches() -> list[pa.RecordBatch]:
    return [make_batch([1, 2]), make_batch([2, 3])]


@pytest.fixture()
def unsorted_batches() -> list[pa.RecordBatch]:
    return [make_batch([1, 3]), make_batch([2])]
