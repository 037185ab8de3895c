from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.catalog import CatalogEntry, Expedition, WarehouseStock

"""Catalog cross-validation lookups.

The snapshot for one warehouse is indexed once per file. A key matches a
product when it is exactly equal (no case folding, no trimming) to the
product's code or its internal id; the first product in snapshot order wins.
"""

__all__ = [
    "CatalogIndex",
    "approved_expeditions",
    "stock_for",
]

logger = logging.getLogger(__name__)


class CatalogIndex:
    """Read-only lookup table over one catalog snapshot."""

    def __init__(self, entries: Iterable[CatalogEntry] | None = None) -> None:
        self._entries: list[CatalogEntry] = [e for e in (entries or []) if e is not None]
        self._by_key: dict[str, CatalogEntry] = {}
        duplicates: set[str] = set()
        for entry in self._entries:
            for key in {entry.code, entry.id}:
                if not key:
                    continue
                if key in self._by_key:
                    if self._by_key[key] is not entry:
                        duplicates.add(key)
                    continue
                self._by_key[key] = entry
        if duplicates:
            # 同一キーの重複は先勝ち。上流カタログ側の確認が必要
            logger.warning(
                "catalog snapshot has %d ambiguous product key(s), first match wins: %s",
                len(duplicates),
                sorted(duplicates)[:10],
            )

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, key: str) -> CatalogEntry | None:
        """Return the first product whose code or id equals ``key``."""
        return self._by_key.get(key)


def approved_expeditions(entry: CatalogEntry) -> tuple[Expedition, ...]:
    return tuple(entry.available_expeditions or ())


def stock_for(entry: CatalogEntry, warehouse_id: str) -> WarehouseStock | None:
    """Stock entry of ``entry`` for the warehouse being imported into, if any."""
    for ws in entry.warehouses or ():
        if ws is not None and ws.warehouse_id == warehouse_id:
            return ws
    return None
