from __future__ import annotations

from pathlib import Path

import pytest

from order_import.config.loader import (
    ENV_CATALOG_PATH,
    ENV_WAREHOUSE_ID,
    ConfigError,
    ImportConfig,
    apply_env_overrides,
    load_config,
)


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.warehouse_id == "warehouse-1"
    assert cfg.catalog_path == "./config/catalog.yml"
    assert cfg.export_directory == "./exports"
    assert cfg.logs_directory == "./logs"


def test_load_config_defaults(temp_workdir: Path):
    p = temp_workdir / "config" / "import.yml"
    p.write_text("warehouse_id: wh-9\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.warehouse_id == "wh-9"
    assert cfg.catalog_path is None
    assert cfg.export_directory == "./exports"


def test_load_config_missing(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "missing.yml")


def test_load_config_invalid_yaml(temp_workdir: Path):
    p = temp_workdir / "config" / "import.yml"
    p.write_text("warehouse_id: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(p)


def test_load_config_unknown_key(temp_workdir: Path):
    p = temp_workdir / "config" / "import.yml"
    p.write_text("warehouse_id: wh\nsource_directory: ./data\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(p)


def test_load_config_wrong_type(temp_workdir: Path):
    p = temp_workdir / "config" / "import.yml"
    p.write_text("warehouse_id: 12\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(p)


def test_env_overrides(monkeypatch):
    cfg = ImportConfig(warehouse_id="wh-file", catalog_path="file.yml")
    monkeypatch.setenv(ENV_WAREHOUSE_ID, "wh-env")
    monkeypatch.delenv(ENV_CATALOG_PATH, raising=False)
    out = apply_env_overrides(cfg)
    assert out.warehouse_id == "wh-env"
    assert out.catalog_path == "file.yml"
    # 元の設定は不変
    assert cfg.warehouse_id == "wh-file"
