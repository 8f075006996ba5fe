"""
Configuration loader for validation runs.

Settings come from an optional YAML file and are overridden by VALIDATOR_*
environment variables. Nothing is passed as command-line flags.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "validator.yaml"

ENV_PREFIX = "VALIDATOR_"


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Read validator settings from YAML, resolving ${VAR} values from the environment.

    Without ``config_path`` the optional config/validator.yaml is used; when it is
    absent the result is empty and everything falls back to VALIDATOR_* variables
    and defaults. An explicit path that does not exist raises FileNotFoundError.
    """
    path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)
    if not path.exists():
        if config_path is None:
            return {}
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

    return cast(dict[str, Any], _resolve_env(data))


def _resolve_env(value: Any) -> Any:
    # Whole-string ${VAR} only; unset variables keep the placeholder.
    if isinstance(value, dict):
        return {k: _resolve_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env(v) for v in value]
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], value)
    return value


@dataclass(frozen=True)
class ValidatorConfig:
    """Resolved settings for one validation run."""

    local_dir: Path = Path("data/local")
    catalog_dir: Path = Path("data/catalog")
    remote_bucket: str | None = None
    remote_prefix: str = ""
    batch_size: int = 4096
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        config: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ValidatorConfig:
        """
        Build settings from a config mapping, then apply VALIDATOR_* overrides.

        Args:
            config: Values loaded by load_config(). If None, loads the default file.
            environ: Environment to read overrides from. Defaults to os.environ.
        """
        if config is None:
            config = load_config()
        if environ is None:
            environ = os.environ

        def pick(name: str, default: Any) -> Any:
            env_value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if env_value not in (None, ""):
                return env_value
            value = config.get(name)
            return default if value is None else value

        batch_size_raw = pick("batch_size", cls.batch_size)
        try:
            batch_size = int(batch_size_raw)
        except (TypeError, ValueError) as e:
            raise ValueError(f"batch_size must be an integer, got {batch_size_raw!r}") from e
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        return cls(
            local_dir=Path(pick("local_dir", cls.local_dir)),
            catalog_dir=Path(pick("catalog_dir", cls.catalog_dir)),
            remote_bucket=pick("remote_bucket", None) or None,
            remote_prefix=str(pick("remote_prefix", "")),
            batch_size=batch_size,
            log_level=str(pick("log_level", cls.log_level)).upper(),
        )
