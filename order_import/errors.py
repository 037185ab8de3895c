from __future__ import annotations

"""File-level (structural) error base class.

Structural errors abort the whole file before any row-level result exists.
Row problems are never raised; they are accumulated on ParsedOrder.
"""

__all__ = [
    "StructuralError",
]


class StructuralError(Exception):
    """Base for failures that reject the whole import file.

    ``str(exc)`` is the operator-facing message.
    """
