from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime

from ..constants import (
    ERROR_SEPARATOR,
    EXPECTED_COLUMNS,
    EXPORT_COLUMNS,
    PRODUCT_SEPARATOR,
    STATUS_ERROR,
    STATUS_VALID,
)
from ..models.order import ParsedOrder
from .decoder import explode

"""Report exporter: parsed orders -> corrected CSV for operator correction.

Output format (re-importable by the tabular reader):
- UTF-8 BOM, CRLF line endings, written with the csv module
- the 11 contract columns followed by STATUS (Valid / Error) and ERRORS
  (error messages joined with "; ", warnings excluded)
- multi-product fields re-joined with "|" in their original order, keeping
  each item as the operator typed it ("+29.99" and "02" are not normalised)
- fields containing a comma, a quote, CR or LF are quoted, inner quotes
  doubled
"""

__all__ = [
    "BOM",
    "LINE_END",
    "EXAMPLE_FILE_NAME",
    "EXAMPLE_ROW",
    "render_csv",
    "order_to_row",
    "export_corrected_csv",
    "corrected_file_name",
    "build_example_csv",
]

BOM = "\ufeff"
LINE_END = "\r\n"
EXAMPLE_FILE_NAME = "order_import_example.csv"

EXAMPLE_ROW: tuple[str, ...] = (
    "ORD001",
    "PROD001|PROD002",
    "2024-01-15",
    "Product 1|Product 2",
    "https://example.com/prod1|https://example.com/prod2",
    "John Doe",
    "+1234567890",
    "123 Main St, City, Country",
    "29.99|45.00",
    "2|1",
    "My Store",
)


def render_csv(rows: Iterable[Sequence[object]]) -> bytes:
    """Serialize rows as UTF-8 CSV with a BOM and CRLF line endings."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator=LINE_END)
    writer.writerows(rows)
    return (BOM + buf.getvalue()).encode("utf-8")


def _covers_every_position(order: ParsedOrder) -> bool:
    """True when every exploded product position became a ProductLine."""
    src = order.source
    return bool(order.products) and src is not None and len(order.products) == len(explode(src.product_ids))


def _product_fields(order: ParsedOrder) -> tuple[str, ...]:
    """PRODUCT ID / PRODUCT NAME / PRICE / QUANTITY cells for one order."""
    src = order.source
    if src is None:
        products = order.products
        return (
            PRODUCT_SEPARATOR.join(p.id for p in products),
            PRODUCT_SEPARATOR.join(p.name for p in products),
            PRODUCT_SEPARATOR.join(str(p.price) for p in products),
            PRODUCT_SEPARATOR.join(str(p.quantity) for p in products),
        )
    cells = (src.product_ids, src.product_names, src.prices, src.quantities)
    if _covers_every_position(order):
        return tuple(PRODUCT_SEPARATOR.join(explode(c)) for c in cells)
    # 一部の商品が解析できなかった行は入力値をそのまま戻す
    return cells


def order_to_row(order: ParsedOrder) -> list[str]:
    """Export row (13 cells) for one parsed order."""
    product_ids, product_names, prices, quantities = _product_fields(order)
    return [
        order.order_id,
        product_ids,
        order.date,
        product_names,
        order.product_link,
        order.customer.name,
        order.customer.phone,
        order.customer.address,
        prices,
        quantities,
        order.store_name,
        STATUS_VALID if not order.errors else STATUS_ERROR,
        ERROR_SEPARATOR.join(order.errors),
    ]


def export_corrected_csv(orders: Sequence[ParsedOrder]) -> bytes:
    """Serialize every parsed order (source order) into the corrected CSV."""
    return render_csv([EXPORT_COLUMNS, *(order_to_row(o) for o in orders)])


def corrected_file_name(today: date | None = None) -> str:
    """Download name of the corrected file, e.g. corrected_orders_2024-01-15.csv."""
    day = today or datetime.now(UTC).date()
    return f"corrected_orders_{day.isoformat()}.csv"


def build_example_csv() -> bytes:
    """Template file offered to sellers: header plus one sample row."""
    return render_csv([EXPECTED_COLUMNS, EXAMPLE_ROW])
