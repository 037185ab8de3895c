"""Bulk order import & validation pipeline.

Reads a seller-supplied CSV / Excel order file, validates every row against a
warehouse catalog snapshot and produces a per-row admission decision.
"""

__version__ = "0.1.0"
