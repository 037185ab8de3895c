from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from ..models.catalog import CatalogEntry
from ..models.order import ParsedOrder
from ..models.processing_result import BulkCreationResult

"""Interfaces of the external collaborators of the import pipeline.

- CatalogSource: read API returning the products available in a warehouse.
- BulkOrderCreator: write API creating orders in bulk. The pipeline never
  calls it; it only produces its (error-free) input.
"""

__all__ = [
    "CatalogSource",
    "BulkOrderCreator",
]


@runtime_checkable
class CatalogSource(Protocol):
    """Catalog read API (products / stock / approved expeditions per warehouse)."""

    def get_products_for_warehouse(self, warehouse_id: str) -> Iterable[CatalogEntry] | None: ...


@runtime_checkable
class BulkOrderCreator(Protocol):
    """Bulk order creation transaction (accepts error-free orders only)."""

    def create_bulk_order(self, orders: Sequence[ParsedOrder], warehouse_id: str) -> BulkCreationResult: ...
