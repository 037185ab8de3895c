from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from ..config.loader import SCHEMA_DIR, validate_document
from ..models.catalog import CatalogEntry, Expedition, WarehouseStock

"""Catalog snapshot file source (YAML or JSON).

Offline stand-in for the catalog read API, used by the CLI. The file lists
every product with its per-warehouse stock and its expeditions; a request for
one warehouse returns the products stocked there, with expeditions narrowed
to the approved ones usable from that warehouse.
"""

__all__ = [
    "CatalogFileError",
    "FileCatalogSource",
    "APPROVED_STATUS",
    "entry_from_dict",
]

CATALOG_SCHEMA_PATH = SCHEMA_DIR / "catalog_schema.json"
APPROVED_STATUS = "approved"


class CatalogFileError(Exception):
    """Raised when the catalog snapshot file is missing or invalid."""


def _decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise CatalogFileError(f"invalid unit_price: {value!r}") from e


def entry_from_dict(raw: dict[str, Any], warehouse_id: str) -> CatalogEntry | None:
    """Convert one product mapping to a CatalogEntry scoped to ``warehouse_id``.

    Returns None when the product has no stock entry for the warehouse.
    """
    stocks = tuple(
        WarehouseStock(warehouse_id=w["warehouse_id"], stock=int(w["stock"]))
        for w in raw.get("warehouses", [])
    )
    if not any(s.warehouse_id == warehouse_id for s in stocks):
        return None

    expeditions: list[Expedition] = []
    for exp in raw.get("expeditions", []):
        if str(exp.get("status", "")).lower() != APPROVED_STATUS:
            continue
        exp_wh = exp.get("warehouse_id")
        if exp_wh and exp_wh != warehouse_id:
            continue
        expeditions.append(
            Expedition(
                id=exp["id"],
                expedition_code=exp.get("expedition_code", ""),
                status=exp["status"],
                unit_price=_decimal(exp["unit_price"]),
                warehouse_id=exp_wh,
            )
        )

    return CatalogEntry(
        id=raw["id"],
        code=raw["code"],
        name=raw.get("name", ""),
        status=raw.get("status", "active"),
        warehouses=stocks,
        available_expeditions=tuple(expeditions),
    )


class FileCatalogSource:
    """CatalogSource backed by a snapshot file on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _load(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            raise CatalogFileError(f"catalog file not found: {self.path}")
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise CatalogFileError(f"invalid catalog file: {e}") from e
        validate_document(data, CATALOG_SCHEMA_PATH, CatalogFileError, label="catalog")
        return data["products"]

    def get_products_for_warehouse(self, warehouse_id: str) -> list[CatalogEntry]:
        entries: list[CatalogEntry] = []
        for raw in self._load():
            entry = entry_from_dict(raw, warehouse_id)
            if entry is not None:
                entries.append(entry)
        return entries
