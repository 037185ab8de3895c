from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from ..catalog.file_source import FileCatalogSource
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, ImportConfig, apply_env_overrides, load_config
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.processing_result import FileProcessingResult
from ..services.exporter import (
    EXAMPLE_FILE_NAME,
    build_example_csv,
    corrected_file_name,
    export_corrected_csv,
)
from ..services.processor import process_path
from ..services.summary import render_summary_line
from ..tabular.reader import read_tabular

"""CLI entrypoint: validate one order import file against a warehouse catalog.

Flow:
- Load .env (overrides existing environment) and config/import.yml
- Resolve warehouse / catalog (flag > environment > config file)
- Run the import pipeline, log every row error / warning, write the error log
- Optionally export the corrected CSV
- Print one SUMMARY line

Exit codes: 0 all rows valid, 2 some rows have errors, 1 fatal.
"""

EXIT_SUCCESS_ALL = 0
EXIT_ROW_ERRORS = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv so its values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Bulk order import file validator")
    p.add_argument("file", nargs="?", help="CSV / XLSX / XLS order file to validate")
    p.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="YAML config path")
    p.add_argument("--warehouse", help="Warehouse id (overrides env and config)")
    p.add_argument("--catalog", help="Catalog snapshot file (overrides env and config)")
    p.add_argument("--export", action="store_true", help="Write the corrected CSV to the export directory")
    p.add_argument("--example", metavar="PATH", help="Write the example template CSV to PATH and exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the header and first rows then exit")
    return p.parse_args(argv)


def _inspect_data(path: Path) -> int:
    try:
        rows = read_tabular(path.read_bytes(), path.name)
    except Exception as e:
        print(f"inspect: read_error: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name}")
    print(f"  header={rows[0]}")
    for i, row in enumerate(rows[1:4], start=2):
        print(f"  row {i}: {row}")
    return EXIT_SUCCESS_ALL


def _log_row_results(logger, result: FileProcessingResult) -> None:
    for order in result.orders:
        context = {"row": order.row_index, "order": order.order_id or "-"}
        for msg in order.errors:
            logger.error(msg, extra=context)
        for msg in order.warnings:
            logger.warning(msg, extra=context)


def _export(cfg: ImportConfig, result: FileProcessingResult) -> Path:
    out_dir = Path(cfg.export_directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    out = out_dir / corrected_file_name()
    out.write_bytes(export_corrected_csv(result.orders))
    return out


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで [] を渡した場合に pytest 引数が混入しないように)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    if args.example:
        target = Path(args.example)
        if target.is_dir():
            target = target / EXAMPLE_FILE_NAME
        target.write_bytes(build_example_csv())
        logger.info(f"example written: {target}")
        return EXIT_SUCCESS_ALL

    if not args.file:
        logger.error("no input file given")
        return EXIT_FATAL
    path = Path(args.file)
    if not path.exists():
        logger.error(f"file not found: {path}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(path)

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = apply_env_overrides(load_config(Path(args.config)))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    warehouse_id = args.warehouse or cfg.warehouse_id
    catalog_path = args.catalog or cfg.catalog_path
    if not warehouse_id:
        logger.error("config: warehouse_id is not set")
        return EXIT_FATAL
    if not catalog_path:
        logger.error("config: catalog_path is not set")
        return EXIT_FATAL
    if not Path(catalog_path).exists():
        logger.error(f"config: catalog file not found: {catalog_path}")
        return EXIT_FATAL

    logger.info(f"Validating {path.name} for warehouse {warehouse_id}")

    source = FileCatalogSource(catalog_path)
    start = time.perf_counter()
    result = process_path(path, warehouse_id, source, show_progress=True)
    elapsed = time.perf_counter() - start

    error_log = ErrorLogBuffer(Path(cfg.logs_directory))
    error_log.record_result(path.name, result)
    log_path = error_log.flush()
    if log_path is not None:
        logger.debug(f"error log written: {log_path}")

    if not result.success:
        logger.error(f"file: {result.message}")
        log_summary(render_summary_line(path.name, result, elapsed)[8:])
        return EXIT_FATAL

    _log_row_results(logger, result)

    if args.export:
        out = _export(cfg, result)
        logger.info(f"corrected file written: {out}")

    log_summary(render_summary_line(path.name, result, elapsed)[8:])

    if result.error_rows > 0:
        return EXIT_ROW_ERRORS
    return EXIT_SUCCESS_ALL
