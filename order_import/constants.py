from __future__ import annotations

"""Column contract shared by the reader, header validator and exporter.

The import file is positional: field offsets are derived from this tuple, so
the reader, the validator and the exporter must always agree on it.
"""

__all__ = [
    "EXPECTED_COLUMNS",
    "COLUMN_COUNT",
    "REPORT_COLUMNS",
    "EXPORT_COLUMNS",
    "PRODUCT_SEPARATOR",
    "ERROR_SEPARATOR",
    "STATUS_VALID",
    "STATUS_ERROR",
    "SPREADSHEET_EXTENSIONS",
    "SPREADSHEET_MIME_TYPES",
    "MSG_NOT_ENOUGH_ROWS",
    "MSG_CATALOG_FETCH_FAILED",
]

EXPECTED_COLUMNS: tuple[str, ...] = (
    "ORDER ID",
    "PRODUCT ID",
    "DATE",
    "PRODUCT NAME",
    "PRODUCT LINK",
    "CUSTOMER NAME",
    "PHONE NUMBER",
    "ADDRESS",
    "PRICE",
    "QUANTITY",
    "STORE NAME",
)
COLUMN_COUNT = len(EXPECTED_COLUMNS)

# Appended by the corrected-file export; ignored when such a file is re-imported
REPORT_COLUMNS: tuple[str, ...] = ("STATUS", "ERRORS")
EXPORT_COLUMNS: tuple[str, ...] = EXPECTED_COLUMNS + REPORT_COLUMNS

PRODUCT_SEPARATOR = "|"
ERROR_SEPARATOR = "; "

STATUS_VALID = "Valid"
STATUS_ERROR = "Error"

SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls"})
SPREADSHEET_MIME_TYPES = frozenset(
    {
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
)

MSG_NOT_ENOUGH_ROWS = "File must contain at least a header row and one data row"
MSG_CATALOG_FETCH_FAILED = "Failed to fetch available products for validation"
