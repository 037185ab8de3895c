from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from .raw_row import RawRow

"""Decoded order models: ProductLine, Customer and ParsedOrder.

ParsedOrder is the unit of admission. An order with an empty ``errors``
tuple may be sent to bulk creation; ``warnings`` never block.
"""

__all__ = [
    "ProductLine",
    "Customer",
    "ParsedOrder",
]


@dataclass(frozen=True)
class ProductLine:
    """One decoded order item."""
    id: str  # product code or internal id as written in the file
    name: str
    quantity: int  # > 0
    price: Decimal  # unit price, > 0


@dataclass(frozen=True)
class Customer:
    name: str
    phone: str
    address: str


@dataclass(frozen=True)
class ParsedOrder:
    """Per-row admission result (one per data row of the import file).

    ``row_index`` is the 1-based line in the source file counting the header,
    so the first data row is 2.
    """
    order_id: str
    products: tuple[ProductLine, ...]
    date: str  # opaque, never parsed
    customer: Customer
    store_name: str
    row_index: int
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    product_link: str = ""
    source: RawRow | None = field(default=None, compare=False, repr=False)

    @property
    def is_valid(self) -> bool:
        return not self.errors
