# index_order_validator/catalog.py
"""
Catalog access for table, index, partition and chunk metadata.

SnapshotCatalog reads a point-in-time export of the metastore laid out as four
parquet tables under one directory:

    tables.parquet      id, schema_name, table_name
    indexes.parquet     id, table_id, name, sort_key_size
    partitions.parquet  id, index_id, active, main_table_row_count, suffix
    chunks.parquet      id, partition_id, active, uploaded, suffix

The snapshot is assumed internally consistent; it is never locked or written.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

import polars as pl

from index_order_validator.errors import CatalogError, NotFoundError
from index_order_validator.models import Chunk, Index, Partition, PartitionWithChunks, Table

logger = logging.getLogger(__name__)

CATALOG_SCHEMA: dict[str, tuple[str, ...]] = {
    "tables": ("id", "schema_name", "table_name"),
    "indexes": ("id", "table_id", "name", "sort_key_size"),
    "partitions": ("id", "index_id", "active", "main_table_row_count", "suffix"),
    "chunks": ("id", "partition_id", "active", "uploaded", "suffix"),
}


class Catalog(Protocol):
    def get_table(self, schema: str, name: str) -> Table:
        """Return the table or raise NotFoundError."""
        ...

    def get_table_indexes(self, table_id: int) -> list[Index]: ...

    def get_active_partitions_and_chunks(
        self, index_ids: Sequence[int]
    ) -> list[list[PartitionWithChunks]]:
        """One list of (partition, chunks) per requested index id, in the same order."""
        ...


class SnapshotCatalog:
    def __init__(self, catalog_dir: Path | str) -> None:
        self.catalog_dir = Path(catalog_dir)

    def _scan(self, name: str) -> pl.LazyFrame:
        path = self.catalog_dir / f"{name}.parquet"
        if not path.exists():
            raise CatalogError(f"Catalog snapshot table not found: {path}")

        required = CATALOG_SCHEMA[name]
        try:
            lf = pl.scan_parquet(path)
            names = lf.collect_schema().names()
        except Exception as e:
            raise CatalogError(f"Failed to read catalog table {path}: {e}") from e

        missing = [c for c in required if c not in names]
        if missing:
            raise CatalogError(f"Catalog table {path} missing required columns: {missing}")
        return lf.select(list(required))

    def _collect(self, lf: pl.LazyFrame, what: str) -> pl.DataFrame:
        try:
            return lf.collect()
        except pl.exceptions.PolarsError as e:
            raise CatalogError(f"Failed to query {what}: {e}") from e

    def get_table(self, schema: str, name: str) -> Table:
        df = self._collect(
            self._scan("tables").filter(
                (pl.col("schema_name") == schema) & (pl.col("table_name") == name)
            ),
            "tables",
        )
        if df.height == 0:
            raise NotFoundError(f"Table {schema}.{name} was not found")
        if df.height > 1:
            raise CatalogError(f"Table {schema}.{name} is ambiguous: {df.height} rows in snapshot")

        row = df.row(0, named=True)
        return Table(id=int(row["id"]), schema_name=row["schema_name"], table_name=row["table_name"])

    def get_table_indexes(self, table_id: int) -> list[Index]:
        df = self._collect(
            self._scan("indexes").filter(pl.col("table_id") == table_id).sort("id"),
            "indexes",
        )
        return [
            Index(
                id=int(r["id"]),
                table_id=int(r["table_id"]),
                name=r["name"],
                sort_key_size=int(r["sort_key_size"]),
            )
            for r in df.iter_rows(named=True)
        ]

    def get_active_partitions_and_chunks(
        self, index_ids: Sequence[int]
    ) -> list[list[PartitionWithChunks]]:
        ids = [int(i) for i in index_ids]
        if not ids:
            return []

        partitions_df = self._collect(
            self._scan("partitions")
            .filter(pl.col("index_id").is_in(ids) & pl.col("active"))
            .sort("id"),
            "partitions",
        )
        partition_ids = partitions_df["id"].to_list()

        chunk_rows: list[dict[str, Any]] = []
        if partition_ids:
            chunk_rows = self._collect(
                self._scan("chunks")
                .filter(
                    pl.col("partition_id").is_in(partition_ids)
                    & pl.col("active")
                    & pl.col("uploaded")
                )
                .sort("id"),
                "chunks",
            ).to_dicts()

        chunks_by_partition: dict[int, list[Chunk]] = {}
        for r in chunk_rows:
            chunk = Chunk(
                id=int(r["id"]),
                partition_id=int(r["partition_id"]),
                active=bool(r["active"]),
                uploaded=bool(r["uploaded"]),
                suffix=r["suffix"],
            )
            chunks_by_partition.setdefault(chunk.partition_id, []).append(chunk)

        by_index: dict[int, list[PartitionWithChunks]] = {i: [] for i in ids}
        for r in partitions_df.iter_rows(named=True):
            partition = Partition(
                id=int(r["id"]),
                index_id=int(r["index_id"]),
                active=bool(r["active"]),
                main_table_row_count=int(r["main_table_row_count"] or 0),
                suffix=r["suffix"],
            )
            by_index[partition.index_id].append(
                (partition, chunks_by_partition.get(partition.id, []))
            )

        logger.debug(
            "Loaded %d active partitions and %d chunks for %d indexes",
            partitions_df.height,
            len(chunk_rows),
            len(ids),
        )
        return [by_index[i] for i in ids]
