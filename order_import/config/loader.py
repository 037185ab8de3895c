from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the order import CLI.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against the bundled JSON schema (schemas/config_schema.json)
- Apply defaults (export_directory=./exports, logs_directory=./logs)
- Apply environment overrides (ORDER_IMPORT_WAREHOUSE_ID / ORDER_IMPORT_CATALOG_PATH)
"""

__all__ = [
    "ConfigError",
    "ImportConfig",
    "SCHEMA_DIR",
    "DEFAULT_CONFIG_PATH",
    "ENV_WAREHOUSE_ID",
    "ENV_CATALOG_PATH",
    "load_config",
    "apply_env_overrides",
    "validate_document",
]

SCHEMA_DIR = Path(__file__).parent / "schemas"
SCHEMA_PATH = SCHEMA_DIR / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/import.yml")

ENV_WAREHOUSE_ID = "ORDER_IMPORT_WAREHOUSE_ID"
ENV_CATALOG_PATH = "ORDER_IMPORT_CATALOG_PATH"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportConfig:
    warehouse_id: str | None
    catalog_path: str | None
    export_directory: str = "./exports"
    logs_directory: str = "./logs"


def validate_document(
    data: Any,
    schema_path: Path,
    error_cls: type[Exception] = ConfigError,
    label: str = "config",
) -> None:
    """Validate a loaded YAML/JSON document against a bundled JSON schema.

    Raises:
        error_cls: schema file missing or invalid, or document fails validation
    """
    if not schema_path.exists():
        raise error_cls(f"schema not found: {schema_path}")
    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise error_cls(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise error_cls(f"{label} validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    validate_document(data, SCHEMA_PATH)

    return ImportConfig(
        warehouse_id=data.get("warehouse_id"),
        catalog_path=data.get("catalog_path"),
        export_directory=data.get("export_directory", "./exports"),
        logs_directory=data.get("logs_directory", "./logs"),
    )


def apply_env_overrides(cfg: ImportConfig) -> ImportConfig:
    """Environment variables (typically loaded from .env) take precedence over the file."""
    warehouse = os.getenv(ENV_WAREHOUSE_ID) or cfg.warehouse_id
    catalog = os.getenv(ENV_CATALOG_PATH) or cfg.catalog_path
    return replace(cfg, warehouse_id=warehouse, catalog_path=catalog)
