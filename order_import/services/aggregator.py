from __future__ import annotations

from collections.abc import Iterable

from ..models.order import ParsedOrder
from ..models.processing_result import FileProcessingResult

"""Order aggregation: per-row ParsedOrder list -> FileProcessingResult.

Pure bookkeeping, no business validation. Orders keep their source order so
the row index stays meaningful to the operator.
"""

__all__ = [
    "aggregate_orders",
]


def aggregate_orders(orders: Iterable[ParsedOrder]) -> FileProcessingResult:
    """Fold decoded rows into a successful FileProcessingResult."""
    ordered = list(orders)
    valid = sum(1 for o in ordered if not o.errors)
    return FileProcessingResult(
        success=True,
        orders=ordered,
        total_rows=len(ordered),
        valid_rows=valid,
        error_rows=len(ordered) - valid,
    )
