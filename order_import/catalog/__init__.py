"""Catalog collaborators: read/write API protocols and the snapshot file source."""

from .file_source import CatalogFileError, FileCatalogSource
from .protocols import BulkOrderCreator, CatalogSource

__all__ = [
    "BulkOrderCreator",
    "CatalogSource",
    "CatalogFileError",
    "FileCatalogSource",
]
