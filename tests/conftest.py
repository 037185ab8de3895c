# Shared pytest fixtures
from __future__ import annotations
import logging
import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from order_import.logging.init import APP_LOGGER_NAME, reset_logging
from order_import.models.catalog import CatalogEntry, Expedition, WarehouseStock

HEADER = "ORDER ID,PRODUCT ID,DATE,PRODUCT NAME,PRODUCT LINK,CUSTOMER NAME,PHONE NUMBER,ADDRESS,PRICE,QUANTITY,STORE NAME"
WAREHOUSE = "warehouse-1"


class StaticCatalogSource:
    """In-memory CatalogSource returning a fixed snapshot."""

    def __init__(self, entries=None, error: Exception | None = None) -> None:
        self.entries = entries
        self.error = error
        self.calls: list[str] = []

    def get_products_for_warehouse(self, warehouse_id: str):
        self.calls.append(warehouse_id)
        if self.error is not None:
            raise self.error
        return self.entries


def make_entry(
    code: str,
    stock: int,
    *,
    id: str | None = None,
    expeditions: int = 1,
    warehouse_id: str = WAREHOUSE,
) -> CatalogEntry:
    return CatalogEntry(
        id=id or f"id-{code}",
        code=code,
        name=f"Name {code}",
        status="active",
        warehouses=(WarehouseStock(warehouse_id=warehouse_id, stock=stock),),
        available_expeditions=tuple(
            Expedition(id=f"exp-{code}-{i}", expedition_code=f"EXP-{code}-{i}", status="approved", unit_price=Decimal("10.99"))
            for i in range(expeditions)
        ),
    )


def csv_bytes(*data_lines: str, header: str = HEADER, bom: bool = False, newline: str = "\n") -> bytes:
    text = newline.join([header, *data_lines])
    if bom:
        text = "\ufeff" + text
    return text.encode("utf-8")


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def catalog_entries() -> list[CatalogEntry]:
    return [
        make_entry("PROD001", 5, id="product-1"),
        make_entry("PROD002", 0, id="product-2"),
    ]


@pytest.fixture()
def catalog_source(catalog_entries) -> StaticCatalogSource:
    return StaticCatalogSource(catalog_entries)


@pytest.fixture()
def sample_catalog_yaml() -> str:
    return """products:
  - id: product-1
    code: PROD001
    name: Product 1
    status: active
    warehouses:
      - warehouse_id: warehouse-1
        stock: 5
    expeditions:
      - id: exp-1
        expedition_code: EXP001
        status: approved
        unit_price: 10.99
  - id: product-2
    code: PROD002
    name: Product 2
    status: active
    warehouses:
      - warehouse_id: warehouse-1
        stock: 0
    expeditions:
      - id: exp-2
        expedition_code: EXP002
        status: approved
        unit_price: 25.50
"""


@pytest.fixture()
def sample_config_yaml() -> str:
    return """warehouse_id: warehouse-1
catalog_path: ./config/catalog.yml
export_directory: ./exports
logs_directory: ./logs
"""


@pytest.fixture()
def write_catalog(temp_workdir: Path, sample_catalog_yaml: str) -> Path:
    p = temp_workdir / "config" / "catalog.yml"
    p.write_text(sample_catalog_yaml, encoding="utf-8")
    return p


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str, write_catalog: Path) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def _isolate_app_logger():
    yield
    # capsys のストリームを掴んだハンドラを次のテストに持ち越さない
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)
    reset_logging()
