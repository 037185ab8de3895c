from __future__ import annotations

from order_import.models.processing_result import FileProcessingResult
from order_import.services.progress import RowProgressTracker
from order_import.services.summary import format_number, render_summary_line


def test_format_number():
    assert format_number(0) == "0"
    assert format_number(2.0) == "2"
    assert format_number(1.23456) == "1.2346"
    assert format_number(0.0012) == "0.0012"


def test_render_summary_line_failure():
    r = FileProcessingResult.failure("bad header", data_rows=3)
    line = render_summary_line("orders.csv", r, 0.0)
    assert line == (
        "SUMMARY file=orders.csv success=false rows=3 valid=0 errors=3 warnings=0 "
        "elapsed_sec=0 throughput_rps=0"
    )


def test_progress_tracker_disabled_counts():
    with RowProgressTracker(3, enabled=False) as p:
        p.advance(valid=True)
        p.advance(valid=False)
        p.advance(valid=True)
    assert (p.current_row, p.valid, p.errors) == (3, 2, 1)
    assert p.pbar is None


def test_progress_tracker_enabled_closes():
    p = RowProgressTracker(1, enabled=True)
    assert p.pbar is not None
    p.advance(valid=True)
    p.close()
    assert p.pbar is None
