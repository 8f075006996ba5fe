# index_order_validator/models.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Table:
    id: int
    schema_name: str
    table_name: str


@dataclass(frozen=True)
class Index:
    """Physical sort layout of a table.

    The first ``sort_key_size`` columns (declared order) form the composite sort key.
    """

    id: int
    table_id: int
    name: str
    sort_key_size: int


@dataclass(frozen=True)
class Partition:
    """Time-ordered slice of an index; owns at most one partition file."""

    id: int
    index_id: int
    active: bool = True
    main_table_row_count: int = 0
    suffix: str | None = None

    def file_name(self) -> str | None:
        # No partition file until chunks have been merged into one.
        if self.main_table_row_count <= 0:
            return None
        if self.suffix:
            return f"{self.id}-{self.suffix}.parquet"
        return f"{self.id}.parquet"


@dataclass(frozen=True)
class Chunk:
    """Recently ingested slice of a partition, always backed by its own file."""

    id: int
    partition_id: int
    active: bool = True
    uploaded: bool = True
    suffix: str | None = None

    def file_name(self) -> str:
        if self.suffix:
            return f"{self.id}-{self.suffix}.chunk.parquet"
        return f"{self.id}.chunk.parquet"


PartitionWithChunks = tuple[Partition, list[Chunk]]
