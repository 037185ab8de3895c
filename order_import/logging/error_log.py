from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import (
    SEVERITY_ERROR,
    SEVERITY_FATAL,
    SEVERITY_WARNING,
    ErrorRecord,
)
from ..models.processing_result import FileProcessingResult

"""Error log generation & buffering.

- JSON Lines, fixed schema (no extra keys)
- One `<logs_dir>/errors-YYYYMMDD-HHMMSS.log` (UTC) per run, created on first flush
- Records are buffered in memory and written once per run
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "ERROR_TYPE_ROW",
    "ERROR_TYPE_STOCK_WARNING",
    "ERROR_TYPE_STRUCTURAL",
    "LOGS_DIR",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

ERROR_TYPE_ROW = "ROW_VALIDATION_ERROR"
ERROR_TYPE_STOCK_WARNING = "ROW_STOCK_WARNING"
ERROR_TYPE_STRUCTURAL = "STRUCTURAL_ERROR"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush writes JSON Lines.

    - flush() appends to the run's file (created if missing)
    - the file path is fixed on first access
    - no thread safety (single file, serial processing)
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir or LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def record_result(self, file_name: str, result: FileProcessingResult) -> None:
        """Buffer every structural failure, row error and row warning of a result."""
        if not result.success:
            self.append(
                ErrorRecord.create(file_name, -1, SEVERITY_FATAL, ERROR_TYPE_STRUCTURAL, result.message or "")
            )
            return
        for order in result.orders:
            for msg in order.errors:
                self.append(ErrorRecord.create(file_name, order.row_index, SEVERITY_ERROR, ERROR_TYPE_ROW, msg))
            for msg in order.warnings:
                self.append(
                    ErrorRecord.create(
                        file_name, order.row_index, SEVERITY_WARNING, ERROR_TYPE_STOCK_WARNING, msg
                    )
                )

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None if nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
