from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the structured error log.

Every row error, stock warning and structural failure of a run is recorded
as one JSON Lines entry. ``row=-1`` is the sentinel for file-level problems
where no data row applies.

The record adheres to order_import/config/schemas/error_log_schema.json.
"""

__all__ = [
    "ErrorRecord",
    "SEVERITY_ERROR",
    "SEVERITY_WARNING",
    "SEVERITY_FATAL",
]

SEVERITY_ERROR = "ERROR"
SEVERITY_WARNING = "WARNING"
SEVERITY_FATAL = "FATAL"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Import file name being processed
        row: Row number (1-based, header is row 1). -1 for file-level errors
        severity: ERROR | WARNING | FATAL
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Operator-facing message
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int  # 行番号。ファイル単位のエラーは -1
    severity: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, severity: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            severity=severity,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format (no extra keys)."""
        return json.dumps(asdict(self), ensure_ascii=False)
