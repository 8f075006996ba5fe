"""Tests for the command-line entry point"""

import logging

import polars as pl
import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from index_order_validator import cli


@pytest.fixture()
def store(tmp_path, monkeypatch):
    catalog_dir = tmp_path / "catalog"
    local_dir = tmp_path / "local"
    catalog_dir.mkdir()
    local_dir.mkdir()

    pl.DataFrame({"id": [1], "schema_name": ["s"], "table_name": ["t"]}).write_parquet(catalog_dir / "tables.parquet")
    pl.DataFrame({"id": [1], "table_id": [1], "name": ["default"], "sort_key_size": [1]}).write_parquet(
        catalog_dir / "indexes.parquet"
    )
    pl.DataFrame(
        {"id": [1], "index_id": [1], "active": [True], "main_table_row_count": [3], "suffix": [None]},
        schema_overrides={"suffix": pl.Utf8},
    ).write_parquet(catalog_dir / "partitions.parquet")
    pl.DataFrame(
        {"id": [2], "partition_id": [1], "active": [True], "uploaded": [True], "suffix": [None]},
        schema_overrides={"suffix": pl.Utf8},
    ).write_parquet(catalog_dir / "chunks.parquet")

    pq.write_table(pa.table({"k": [1, 2, 3]}), local_dir / "1.parquet")

    monkeypatch.setattr(cli.ValidatorConfig, "from_env", classmethod(
        lambda cls: cls(local_dir=local_dir, catalog_dir=catalog_dir, batch_size=2)
    ))
    return local_dir


def test_wrong_arity_prints_usage(capsys, monkeypatch):
    monkeypatch.setattr(cli, "validate_table", lambda *a: pytest.fail("must not validate"))

    assert cli.main(["only_schema"]) == 0
    assert cli.main([]) == 0

    out = capsys.readouterr().out
    assert out.count("Usage: validate <schema> <table>") == 2


def test_valid_table(store, caplog):
    pq.write_table(pa.table({"k": [3, 4]}), store / "2.chunk.parquet")

    with caplog.at_level(logging.INFO):
        assert cli.main(["s", "t"]) == 0

    assert "Index ok" in caplog.text
    assert "validation failed" not in caplog.text


def test_failure_is_logged_not_exit_code(store, caplog):
    pq.write_table(pa.table({"k": [3, 1]}), store / "2.chunk.parquet")

    with caplog.at_level(logging.INFO):
        assert cli.main(["s", "t"]) == 0

    assert "validation failed" in caplog.text
    assert "unsorted data" in caplog.text


def test_missing_table_is_logged(store, caplog):
    assert cli.main(["s", "missing"]) == 0

    assert "Table s.missing was not found" in caplog.text


@pytest.mark.parametrize("value", ["abc", "0"])
def test_bad_batch_size_is_logged(monkeypatch, caplog, value):
    monkeypatch.setenv("VALIDATOR_BATCH_SIZE", value)
    monkeypatch.setattr(cli, "validate_table", lambda *a: pytest.fail("must not validate"))

    assert cli.main(["s", "t"]) == 0

    assert "validation failed" in caplog.text
    assert "batch_size" in caplog.text


def test_comparator_contract_errors_are_logged(monkeypatch, caplog):
    def raise_type_error(*args):
        raise TypeError("Key column 0 type mismatch: int64 vs string")

    monkeypatch.setattr(cli.ValidatorConfig, "from_env", classmethod(lambda cls: cls()))
    monkeypatch.setattr(cli, "validate_table", raise_type_error)

    assert cli.main(["s", "t"]) == 0

    assert "validation failed: Key column 0 type mismatch" in caplog.text
