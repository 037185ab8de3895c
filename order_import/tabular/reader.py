from __future__ import annotations

import csv
import io
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any

import numpy as np
import pandas as pd

from ..constants import (
    COLUMN_COUNT,
    MSG_NOT_ENOUGH_ROWS,
    SPREADSHEET_EXTENSIONS,
    SPREADSHEET_MIME_TYPES,
)
from ..errors import StructuralError

"""Tabular reader: uploaded CSV / Excel bytes -> grid of string cells.

- CSV: UTF-8 text, leading BOM stripped, CRLF/LF line endings, read with the
  csv module so a quoted field may hold commas, doubled quotes and line
  breaks. Cells are trimmed; rows are padded to the column contract but never
  truncated, so a malformed header still reaches the header validator.
- Excel (.xlsx / .xls): first sheet only, read with pandas. Empty cells
  become "", fully blank rows are dropped, rows are padded/truncated to the
  column contract.

At least two rows (header + one data row) are required.
"""

__all__ = [
    "TabularReadError",
    "EmptyFileError",
    "FORMAT_CSV",
    "FORMAT_SPREADSHEET",
    "detect_format",
    "split_csv_line",
    "read_csv_rows",
    "read_spreadsheet_rows",
    "read_tabular",
]

FORMAT_CSV = "csv"
FORMAT_SPREADSHEET = "spreadsheet"

_BOM = "\ufeff"


class TabularReadError(StructuralError):
    """Raised when the file bytes cannot be decoded or the workbook is corrupt."""


class EmptyFileError(StructuralError):
    """Raised when the file has no header row or no data row."""

    def __init__(self, message: str = MSG_NOT_ENOUGH_ROWS) -> None:
        super().__init__(message)


def detect_format(file_name: str, content_type: str | None = None) -> str:
    """Decide how to parse an upload from its name (and optional MIME type).

    Anything that is not recognisably a spreadsheet is read as CSV.
    """
    if PurePath(file_name.lower()).suffix in SPREADSHEET_EXTENSIONS:
        return FORMAT_SPREADSHEET
    if content_type and content_type.split(";")[0].strip().lower() in SPREADSHEET_MIME_TYPES:
        return FORMAT_SPREADSHEET
    return FORMAT_CSV


def _csv_records(text: str):
    # skipinitialspace: ` "a, b"` のように区切り直後の空白があっても引用符として扱う
    return csv.reader(io.StringIO(text, newline=""), skipinitialspace=True)


def _finish_record(cells: list[str]) -> list[str]:
    """Trim every cell and pad with "" up to the column contract."""
    out = [c.strip() for c in cells]
    out.extend("" for _ in range(COLUMN_COUNT - len(out)))
    return out


def _is_blank_record(cells: list[str]) -> bool:
    # 空行・空白のみの行 (カンマだけの行は空行扱いしない)
    return len(cells) <= 1 and not "".join(cells).strip()


def split_csv_line(line: str) -> list[str]:
    """Split one CSV record on commas outside double quotes.

    Each cell is trimmed and the result is padded with "" up to the column
    contract (longer rows are kept as-is).
    """
    return _finish_record(next(_csv_records(line), []))


def read_csv_rows(content: bytes) -> list[list[str]]:
    """Parse CSV bytes into rows of cells, dropping blank records."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TabularReadError(f"Failed to read file as text: {e}") from e
    if text.startswith(_BOM):
        text = text[1:]
    try:
        return [_finish_record(r) for r in _csv_records(text) if not _is_blank_record(r)]
    except csv.Error as e:
        raise TabularReadError(f"Failed to read CSV: {e}") from e


def _cell_to_text(value: Any) -> str:
    """Render a spreadsheet cell the way it is displayed, as text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (datetime, pd.Timestamp)):
        if pd.isna(value):
            return ""
        # 時刻が 0:00 の日付セルは日付のみ
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (bool, np.bool_)):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        if np.isnan(value):
            return ""
        f = float(value)
        if f.is_integer():
            return str(int(f))
        return repr(f)
    return str(value).strip()


def read_spreadsheet_rows(content: bytes) -> list[list[str]]:
    """Read the first worksheet of an Excel workbook as rows of text cells."""
    try:
        xls = pd.ExcelFile(io.BytesIO(content))
        if not xls.sheet_names:
            return []
        # keep_default_na=False: "NA" / "N/A" などの文字列をそのまま残す
        df = xls.parse(xls.sheet_names[0], header=None, keep_default_na=False)
    except Exception as e:
        raise TabularReadError(f"Failed to parse Excel file: {e}") from e

    rows: list[list[str]] = []
    for raw in df.itertuples(index=False, name=None):
        cells = [_cell_to_text(v) for v in raw]
        if not any(cells):
            continue
        cells = cells[:COLUMN_COUNT]
        cells.extend("" for _ in range(COLUMN_COUNT - len(cells)))
        rows.append(cells)
    return rows


def read_tabular(content: bytes, file_name: str, content_type: str | None = None) -> list[list[str]]:
    """Read an uploaded import file into a grid of string cells.

    Raises:
        EmptyFileError: fewer than two non-empty rows
        TabularReadError: undecodable text or corrupt workbook
    """
    if detect_format(file_name, content_type) == FORMAT_SPREADSHEET:
        rows = read_spreadsheet_rows(content)
    else:
        rows = read_csv_rows(content)
    if len(rows) < 2:
        raise EmptyFileError()
    return rows
