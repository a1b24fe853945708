from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from src.models.field_schema import DEFAULT_INVOICE_ROW_SCHEMA, FieldKind, FieldRule, FieldSchema

"""Config loader.

Responsibilities:
- Load YAML config (default: config/import.yml, or $INVOICE_IMPORT_CONFIG)
- Validate against the bundled JSON schema (config_schema.json)
- Build the row FieldSchema; fall back to the built-in invoice schema when
  the default config file is absent
"""

__all__ = [
    "ConfigError",
    "ImportConfig",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "load_config",
    "resolve_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")
CONFIG_ENV_VAR = "INVOICE_IMPORT_CONFIG"
DEFAULT_LOGS_DIRECTORY = "./logs"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportConfig:
    row_schema: FieldSchema
    output_directory: str | None = None  # None の場合 JSON ファイルは書き出さない
    logs_directory: str = DEFAULT_LOGS_DIRECTORY


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or data fails validation
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


def _build_row_schema(entries: list[dict[str, Any]]) -> FieldSchema:
    rules = tuple(
        FieldRule(
            name=entry["name"].strip(),
            kind=FieldKind(entry["kind"]),
            required=entry.get("required", True),
        )
        for entry in entries
    )
    try:
        return FieldSchema(rules=rules)
    except ValueError as e:
        raise ConfigError(f"config validation failed: {e}") from e


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    return ImportConfig(
        row_schema=_build_row_schema(data["row_schema"]),
        output_directory=data.get("output_directory"),
        logs_directory=data.get("logs_directory", DEFAULT_LOGS_DIRECTORY),
    )


def resolve_config(explicit_path: Path | None = None) -> ImportConfig:
    """Resolve configuration with the precedence: --config > env var > default path.

    Only a missing *default* file falls back to built-in settings; an
    explicitly requested file that does not exist is an error.
    """
    if explicit_path is not None:
        return load_config(explicit_path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ImportConfig(row_schema=DEFAULT_INVOICE_ROW_SCHEMA)
