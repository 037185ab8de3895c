from __future__ import annotations

from ..models.order import ParsedOrder
from ..models.processing_result import FileProcessingResult

"""Bulk-creation candidate selection.

An order is admitted to bulk creation if and only if its error list is
empty; warnings never block. The pipeline does not call the creation API
itself, it only hands the caller this filtered list.
"""

__all__ = [
    "bulk_candidates",
    "rejected_orders",
]


def bulk_candidates(result: FileProcessingResult) -> list[ParsedOrder]:
    """Orders eligible for BulkOrderCreator.create_bulk_order (source order)."""
    if not result.success:
        return []
    return [o for o in result.orders if not o.errors]


def rejected_orders(result: FileProcessingResult) -> list[ParsedOrder]:
    """Orders excluded from bulk creation, for the corrected-file export."""
    return [o for o in result.orders if o.errors]
