#!/usr/bin/env python3
"""
Offline sort-order validation for one table.

Usage:
    python -m index_order_validator.cli <schema> <table>
    validate-index-order <schema> <table>

Configuration comes from config/validator.yaml (optional) and VALIDATOR_*
environment variables. Failures are logged at error level; the exit status
is 0 either way.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

import yaml

from index_order_validator.catalog import SnapshotCatalog
from index_order_validator.config import ValidatorConfig
from index_order_validator.errors import OrderValidationError
from index_order_validator.materializer import build_materializer
from index_order_validator.reader import ParquetBatchReader
from index_order_validator.table_validator import validate_table

logger = logging.getLogger(__name__)

USAGE = "Usage: validate <schema> <table>\n\nUse VALIDATOR_* variables for configuration."


def _show_err(explain: str, exc: Exception) -> None:
    logger.error("%s: %s", explain, exc, exc_info=exc)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print(USAGE)
        return 0
    schema, table = args

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    try:
        config = ValidatorConfig.from_env()
        logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))
        validate_table(
            schema,
            table,
            SnapshotCatalog(config.catalog_dir),
            build_materializer(config),
            ParquetBatchReader(batch_size=config.batch_size),
        )
    except (OrderValidationError, ValueError, TypeError, OSError, yaml.YAMLError) as e:
        _show_err("validation failed", e)

    # Exit status does not distinguish failure; callers inspect the log.
    return 0


if __name__ == "__main__":
    sys.exit(main())
