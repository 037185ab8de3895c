from __future__ import annotations

from dataclasses import dataclass, field

from .order import ParsedOrder

"""Processing result model for the order import pipeline.

FileProcessingResult is what the caller receives for preview rendering:
either the full ordered list of parsed orders with row counts, or a
structural failure carrying a single human-readable message.
"""

__all__ = [
    "FileProcessingResult",
    "BulkCreationResult",
]


@dataclass(frozen=True)
class FileProcessingResult:
    """Overall outcome of processing one import file.

    On structural failure ``success`` is False, ``orders`` is empty and
    ``message`` explains why. ``total_rows`` / ``error_rows`` may still carry
    the data row count when the header was rejected.
    """
    success: bool
    orders: list[ParsedOrder] = field(default_factory=list)
    total_rows: int = 0  # データ行数 (ヘッダ除く)
    valid_rows: int = 0
    error_rows: int = 0
    message: str | None = None

    @property
    def warning_rows(self) -> int:
        """Rows that are importable but carry at least one warning."""
        return sum(1 for o in self.orders if not o.errors and o.warnings)

    @classmethod
    def failure(cls, message: str, data_rows: int = 0) -> FileProcessingResult:
        """Build a structural-failure result.

        Args:
            message: Human-readable reason shown to the operator
            data_rows: Number of data rows that were rejected along with the file
        """
        return cls(
            success=False,
            orders=[],
            total_rows=data_rows,
            valid_rows=0,
            error_rows=data_rows,
            message=message,
        )


@dataclass(frozen=True)
class BulkCreationResult:
    """Outcome reported by the bulk order creation API."""
    success_count: int
    total_count: int
    error_count: int = 0

    @property
    def success(self) -> bool:
        return self.error_count == 0 and self.success_count == self.total_count
