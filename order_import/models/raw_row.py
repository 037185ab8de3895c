from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from ..constants import COLUMN_COUNT

"""RawRow model for the order import pipeline.

RawRow is the fixed 11-cell record produced by the tabular reader. Using a
NamedTuple (instead of positional list unpacking) keeps field offsets tied to
the column contract in one place.
"""

__all__ = [
    "RawRow",
]


class RawRow(NamedTuple):
    """One data row of the import file, one string per expected column."""
    order_id: str
    product_ids: str
    date: str
    product_names: str
    product_links: str
    customer_name: str
    phone_number: str
    address: str
    prices: str
    quantities: str
    store_name: str

    @classmethod
    def from_cells(cls, cells: Sequence[str]) -> RawRow:
        """Build a RawRow from the first 11 cells, padding short rows with "".

        Cells beyond the contract (e.g. STATUS / ERRORS of a re-imported
        corrected file) are ignored.
        """
        padded = [str(c) if c is not None else "" for c in cells[:COLUMN_COUNT]]
        padded.extend("" for _ in range(COLUMN_COUNT - len(padded)))
        return cls(*padded)
