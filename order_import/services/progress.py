from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress display with tqdm (TTY only).

- A single tqdm instance per file, disabled when stdout is not a TTY so CI
  logs are not spammed with ANSI control sequences.
- Postfix shows running valid / error counts.
"""

__all__ = [
    "RowProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class RowProgressTracker:
    """Progress tracker for validating the data rows of one import file."""

    def __init__(self, total_rows: int, *, description: str = "Validating rows", enabled: bool | None = None) -> None:
        """Initialize progress tracker.

        Args:
            total_rows: Number of data rows to validate
            description: Description for the progress bar
            enabled: Force on/off; None = follow TTY detection
        """
        self.total_rows = total_rows
        self.description = description
        self.current_row = 0
        self.valid = 0
        self.errors = 0

        self.enabled = is_tty_enabled() if enabled is None else enabled
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, valid: bool) -> None:
        """Record one processed row."""
        self.current_row += 1
        if valid:
            self.valid += 1
        else:
            self.errors += 1
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(valid=self.valid, errors=self.errors)

    def close(self) -> None:
        """Close the progress bar."""
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
