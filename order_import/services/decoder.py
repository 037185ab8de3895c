from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from ..constants import PRODUCT_SEPARATOR
from ..models.order import Customer, ParsedOrder, ProductLine
from ..models.raw_row import RawRow
from .catalog_index import CatalogIndex, approved_expeditions, stock_for

"""Row decoder: one RawRow -> one ParsedOrder with its errors and warnings.

Row problems never raise. Every failure is appended to the order's error
list (blocks bulk creation) or warning list (informational only).

Multi-product rows carry pipe-separated Product ID / Product Name / Price /
Quantity cells which must all split into the same number of items.
"""

__all__ = [
    "REQUIRED_FIELDS",
    "ARITY_ERROR",
    "decode_row",
    "explode",
    "parse_price",
    "parse_quantity",
]

logger = logging.getLogger(__name__)

# (RawRow attribute, label used in "<label> is required")
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("order_id", "Order ID"),
    ("product_ids", "Product ID"),
    ("date", "Date"),
    ("product_names", "Product Name"),
    ("customer_name", "Customer Name"),
    ("phone_number", "Phone Number"),
    ("address", "Address"),
    ("prices", "Price"),
    ("quantities", "Quantity"),
    ("store_name", "Store Name"),
)

ARITY_ERROR = (
    "Product IDs, names, prices, and quantities must have the same number of items "
    "when separated by |"
)


def explode(cell: str) -> list[str]:
    """Split a multi-value cell on ``|`` and trim each item."""
    return [part.strip() for part in cell.split(PRODUCT_SEPARATOR)]


def parse_price(text: str) -> Decimal | None:
    """Return the price as a Decimal, or None unless it is a finite number > 0."""
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def parse_quantity(text: str) -> int | None:
    """Return the quantity, or None unless it is an integer > 0."""
    try:
        value = int(text.strip())
    except ValueError:
        return None
    if value <= 0:
        return None
    return value


def _check_catalog(
    product_id: str,
    quantity: int,
    catalog: CatalogIndex,
    warehouse_id: str,
    errors: list[str],
    warnings: list[str],
) -> None:
    entry = catalog.lookup(product_id)
    if entry is None:
        errors.append(f'Product "{product_id}" does not exist in selected warehouse')
        return

    # 承認済み出荷が無い商品は在庫があっても出荷不可 -> エラー
    if not approved_expeditions(entry):
        errors.append(f'Product "{product_id}" has no approved expeditions in selected warehouse')

    stock = stock_for(entry, warehouse_id)
    if stock is not None and stock.stock < quantity:
        warnings.append(
            f'Product "{product_id}" has insufficient stock '
            f"(available: {stock.stock}, requested: {quantity})"
        )


def _decode_products(
    row: RawRow,
    catalog: CatalogIndex,
    warehouse_id: str,
    errors: list[str],
    warnings: list[str],
) -> list[ProductLine]:
    ids = explode(row.product_ids)
    names = explode(row.product_names)
    prices = explode(row.prices)
    quantities = explode(row.quantities)

    if not (len(ids) == len(names) == len(prices) == len(quantities)):
        errors.append(ARITY_ERROR)
        return []

    products: list[ProductLine] = []
    for position, (product_id, name, price_text, quantity_text) in enumerate(
        zip(ids, names, prices, quantities), start=1
    ):
        if not product_id:
            errors.append(f"Product ID cannot be empty at position {position}")
            continue

        price = parse_price(price_text)
        if price is None:
            errors.append(f'Invalid price "{price_text}" for product {product_id}')
            continue

        quantity = parse_quantity(quantity_text)
        if quantity is None:
            errors.append(f'Invalid quantity "{quantity_text}" for product {product_id}')
            continue

        _check_catalog(product_id, quantity, catalog, warehouse_id, errors, warnings)

        # Appended even when the catalog checks failed so the preview shows the attempt
        products.append(ProductLine(id=product_id, name=name, quantity=quantity, price=price))
    return products


def decode_row(
    row: RawRow,
    row_index: int,
    catalog: CatalogIndex,
    warehouse_id: str,
) -> ParsedOrder:
    """Decode and validate one data row.

    Args:
        row: The 11 cells of the row
        row_index: 1-based line number in the source file (first data row = 2)
        catalog: Index over the warehouse catalog snapshot
        warehouse_id: Warehouse the file is imported into (stock scope)

    Returns:
        ParsedOrder; ``errors`` empty means the row is admissible.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for attr, label in REQUIRED_FIELDS:
        if not getattr(row, attr).strip():
            errors.append(f"{label} is required")

    products: list[ProductLine] = []
    if all(
        cell.strip() for cell in (row.product_ids, row.product_names, row.prices, row.quantities)
    ):
        products = _decode_products(row, catalog, warehouse_id, errors, warnings)

    # Date is intentionally passed through unparsed

    if errors:
        logger.debug("row=%d errors=%s", row_index, errors)

    return ParsedOrder(
        order_id=row.order_id,
        products=tuple(products),
        date=row.date,
        customer=Customer(
            name=row.customer_name,
            phone=row.phone_number,
            address=row.address,
        ),
        store_name=row.store_name,
        row_index=row_index,
        errors=tuple(errors),
        warnings=tuple(warnings),
        product_link=row.product_links,
        source=row,
    )
