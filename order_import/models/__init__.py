"""Domain models for the bulk order import pipeline.

This package contains the row, order, catalog and result types shared by the
reader, the validators and the exporter.
"""

from .catalog import CatalogEntry, Expedition, WarehouseStock
from .error_record import ErrorRecord
from .order import Customer, ParsedOrder, ProductLine
from .processing_result import BulkCreationResult, FileProcessingResult
from .raw_row import RawRow

__all__ = [
    # Catalog snapshot
    "CatalogEntry",
    "Expedition",
    "WarehouseStock",
    # Row / order models
    "RawRow",
    "ProductLine",
    "Customer",
    "ParsedOrder",
    # Results
    "FileProcessingResult",
    "BulkCreationResult",
    "ErrorRecord",
]
