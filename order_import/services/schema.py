from __future__ import annotations

from collections.abc import Sequence

from ..constants import COLUMN_COUNT, EXPECTED_COLUMNS, EXPORT_COLUMNS
from ..errors import StructuralError

"""Header row validation against the fixed, ordered column contract.

Comparison is case-insensitive and order-sensitive. The whole file is
rejected on the first mismatch since data fields are read by position.
A corrected-file export (contract + STATUS, ERRORS) is also accepted.
"""

__all__ = [
    "HeaderValidationError",
    "validate_header",
]


class HeaderValidationError(StructuralError):
    """Raised when the header row does not match the column contract."""

    def __init__(self, message: str, column_index: int | None = None) -> None:
        super().__init__(message)
        self.column_index = column_index  # 1-based, None for a count mismatch


def _normalize(cell: str) -> str:
    return cell.strip().upper()


def validate_header(header: Sequence[str]) -> None:
    """Validate the header row, raising HeaderValidationError on mismatch."""
    normalized = [_normalize(c) for c in header]

    # 修正版CSV (STATUS / ERRORS 付き) の再取込を許可
    if len(normalized) == len(EXPORT_COLUMNS) and normalized[COLUMN_COUNT:] == list(
        EXPORT_COLUMNS[COLUMN_COUNT:]
    ):
        normalized = normalized[:COLUMN_COUNT]

    if len(normalized) != COLUMN_COUNT:
        raise HeaderValidationError(
            f"Expected {COLUMN_COUNT} columns, but found {len(header)}. "
            "Please check your file structure."
        )

    for i, expected in enumerate(EXPECTED_COLUMNS):
        if normalized[i] != expected:
            raise HeaderValidationError(
                f'Column {i + 1} should be "{expected}" but found "{header[i]}"',
                column_index=i + 1,
            )
