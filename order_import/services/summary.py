from __future__ import annotations

from ..models.processing_result import FileProcessingResult

"""SUMMARY line rendering for the order import CLI.

Format:
SUMMARY file={name} success={true|false} rows={total} valid={valid}
errors={error_rows} warnings={warning_rows} elapsed_sec={elapsed}
throughput_rps={throughput}
"""

__all__ = [
    "render_summary_line",
    "format_number",
]


def format_number(value: float) -> str:
    """Render a metric without scientific notation or a trailing '.0'."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 4))


def render_summary_line(file_name: str, result: FileProcessingResult, elapsed_seconds: float) -> str:
    """Render the SUMMARY line for one processed file.

    Examples:
        >>> r = FileProcessingResult(success=True, total_rows=4, valid_rows=3, error_rows=1)
        >>> render_summary_line("orders.csv", r, 2.0)
        'SUMMARY file=orders.csv success=true rows=4 valid=3 errors=1 warnings=0 elapsed_sec=2 throughput_rps=2'
    """
    throughput = result.total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0
    return (
        f"SUMMARY file={file_name} "
        f"success={'true' if result.success else 'false'} "
        f"rows={result.total_rows} "
        f"valid={result.valid_rows} "
        f"errors={result.error_rows} "
        f"warnings={result.warning_rows} "
        f"elapsed_sec={format_number(elapsed_seconds)} "
        f"throughput_rps={format_number(throughput)}"
    )
