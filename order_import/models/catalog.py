from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

"""Catalog snapshot models (read-only view of the warehouse catalog).

These mirror what the catalog read API returns for one warehouse. The
pipeline never mutates them.
"""

__all__ = [
    "WarehouseStock",
    "Expedition",
    "CatalogEntry",
]


@dataclass(frozen=True)
class WarehouseStock:
    """Stock level of a product in one warehouse."""
    warehouse_id: str
    stock: int


@dataclass(frozen=True)
class Expedition:
    """Approved supply batch backing a product's ability to be fulfilled."""
    id: str
    expedition_code: str
    status: str
    unit_price: Decimal
    warehouse_id: str | None = None  # None = applies to every warehouse


@dataclass(frozen=True)
class CatalogEntry:
    """One sellable product scoped to a warehouse.

    A product with zero approved expeditions cannot satisfy an order line
    even if stock exists.
    """
    id: str
    code: str
    name: str = ""
    status: str = "active"
    warehouses: tuple[WarehouseStock, ...] = field(default_factory=tuple)
    available_expeditions: tuple[Expedition, ...] = field(default_factory=tuple)
