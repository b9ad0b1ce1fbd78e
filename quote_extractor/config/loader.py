from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Batch configuration loader.

Responsibilities:
- Load the YAML config (default ``config/quote.yml``)
- Validate it against ``contracts/config_schema.json``
- Apply defaults (output_directory=./out)
"""

__all__ = [
    "BatchConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

# quote_extractor/config/loader.py -> quote_extractor/contracts
SCHEMA_PATH = Path(__file__).parent.parent / "contracts" / "config_schema.json"

DEFAULT_CONFIG_PATH = Path("config/quote.yml")
CONFIG_ENV_VAR = "QUOTE_CONFIG"
DEFAULT_OUTPUT_DIRECTORY = "./out"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class BatchConfig:
    source_directory: str  # .xlsx を探すディレクトリ (非再帰)
    output_directory: str  # quote JSON の出力先
    preferred_sheet: str | None = None
    project_name: str | None = None
    client_name: str | None = None


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or invalid, or the data fails
            validation (missing keys, wrong types, unknown keys)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(cli_path: str | None = None) -> Path:
    """``--config`` wins, then ``$QUOTE_CONFIG``, then ``config/quote.yml``."""
    if cli_path:
        return Path(cli_path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> BatchConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    return BatchConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY),
        preferred_sheet=data.get("preferred_sheet"),
        project_name=data.get("project_name"),
        client_name=data.get("client_name"),
    )
