"""Pipeline services: header validation, row decoding, catalog checks, export."""

from .bulk import bulk_candidates, rejected_orders
from .exporter import build_example_csv, corrected_file_name, export_corrected_csv
from .processor import CatalogFetchError, process_file, process_path

__all__ = [
    "process_file",
    "process_path",
    "CatalogFetchError",
    "bulk_candidates",
    "rejected_orders",
    "export_corrected_csv",
    "corrected_file_name",
    "build_example_csv",
]
