from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..catalog.protocols import CatalogSource
from ..constants import MSG_CATALOG_FETCH_FAILED
from ..errors import StructuralError
from ..models.order import ParsedOrder
from ..models.processing_result import FileProcessingResult
from ..models.raw_row import RawRow
from ..tabular.reader import TabularReadError, read_tabular
from .aggregator import aggregate_orders
from .catalog_index import CatalogIndex
from .decoder import decode_row
from .progress import RowProgressTracker
from .schema import validate_header

"""Import pipeline entry point.

Coordinates one file end to end:
1. Read the upload into rows (tabular reader)
2. Validate the header row against the column contract
3. Fetch the warehouse catalog snapshot once and index it
4. Decode / validate every data row in source order
5. Aggregate into a FileProcessingResult

Structural failures (empty file, bad header, catalog fetch failure, unreadable
file) are caught here once and returned as ``success=False``; row problems
are carried on each ParsedOrder.
"""

__all__ = [
    "CatalogFetchError",
    "HEADER_ROWS",
    "fetch_catalog",
    "process_rows",
    "process_file",
    "process_path",
]

logger = logging.getLogger(__name__)

HEADER_ROWS = 1  # row_index of the first data row = HEADER_ROWS + 1


class CatalogFetchError(StructuralError):
    """Raised when the catalog read API fails for the selected warehouse."""

    def __init__(self, message: str = MSG_CATALOG_FETCH_FAILED) -> None:
        super().__init__(message)


def fetch_catalog(source: CatalogSource, warehouse_id: str) -> CatalogIndex:
    """Fetch the catalog snapshot for ``warehouse_id`` once and index it.

    A ``None`` response is treated as an empty catalog.
    """
    try:
        entries = source.get_products_for_warehouse(warehouse_id)
        index = CatalogIndex(list(entries) if entries is not None else [])
    except Exception as e:
        logger.debug("catalog fetch failed warehouse=%s", warehouse_id, exc_info=True)
        raise CatalogFetchError() from e
    logger.debug("catalog snapshot warehouse=%s products=%d", warehouse_id, len(index))
    return index


def process_rows(
    data_rows: Sequence[Sequence[str]],
    catalog: CatalogIndex,
    warehouse_id: str,
    *,
    show_progress: bool = False,
) -> FileProcessingResult:
    """Decode every data row (header already removed) in source order."""
    orders: list[ParsedOrder] = []
    with RowProgressTracker(len(data_rows), enabled=None if show_progress else False) as progress:
        for position, cells in enumerate(data_rows, start=1):
            order = decode_row(RawRow.from_cells(cells), HEADER_ROWS + position, catalog, warehouse_id)
            orders.append(order)
            progress.advance(valid=not order.errors)
    return aggregate_orders(orders)


def process_file(
    content: bytes,
    file_name: str,
    warehouse_id: str,
    catalog_source: CatalogSource,
    *,
    content_type: str | None = None,
    show_progress: bool = False,
) -> FileProcessingResult:
    """Process one uploaded import file against one warehouse.

    Args:
        content: Raw file bytes
        file_name: Upload name (extension selects CSV vs Excel parsing)
        warehouse_id: Warehouse scope for catalog and stock checks
        catalog_source: Catalog read API
        content_type: Optional declared MIME type
        show_progress: Display a tqdm progress bar (TTY only)

    Returns:
        FileProcessingResult. Never raises for file content problems.
    """
    data_rows: list[list[str]] = []
    try:
        rows = read_tabular(content, file_name, content_type)
        header, data_rows = rows[0], rows[HEADER_ROWS:]

        validate_header(header)
        catalog = fetch_catalog(catalog_source, warehouse_id)
        return process_rows(data_rows, catalog, warehouse_id, show_progress=show_progress)

    except TabularReadError as e:
        logger.debug("unreadable file=%s: %s", file_name, e)
        return FileProcessingResult.failure(f"Failed to process file: {e}")
    except StructuralError as e:
        logger.debug("structural failure file=%s: %s", file_name, e)
        return FileProcessingResult.failure(str(e), data_rows=len(data_rows))
    except Exception as e:
        logger.debug("unexpected failure file=%s", file_name, exc_info=True)
        return FileProcessingResult.failure(f"Failed to process file: {e}")


def process_path(
    path: Path,
    warehouse_id: str,
    catalog_source: CatalogSource,
    *,
    show_progress: bool = False,
) -> FileProcessingResult:
    """Convenience wrapper around process_file for a file on disk."""
    try:
        content = path.read_bytes()
    except OSError as e:
        return FileProcessingResult.failure(f"Failed to process file: {e}")
    return process_file(content, path.name, warehouse_id, catalog_source, show_progress=show_progress)
