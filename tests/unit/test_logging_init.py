from __future__ import annotations

import logging

from order_import.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def _record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord("order_import", level, __file__, 1, msg, None, None)


def test_labeled_formatter():
    fmt = LabeledFormatter()
    assert fmt.format(_record(logging.INFO, "hello")) == "INFO hello"
    assert fmt.format(_record(logging.WARNING, "w")) == "WARN w"
    assert fmt.format(_record(logging.ERROR, "e")) == "ERROR e"
    assert fmt.format(_record(SUMMARY_LEVEL, "s")) == "SUMMARY s"


def test_setup_logging_idempotent():
    reset_logging()
    a = setup_logging()
    b = setup_logging()
    assert a is b
    assert a.name == APP_LOGGER_NAME
    assert len(a.handlers) == 1
    assert get_logger() is a


def test_summary_and_child_loggers_share_handler(capsys):
    reset_logging()
    setup_logging()
    log_summary("file=x.csv rows=1")
    logging.getLogger("order_import.services.catalog_index").warning("dup key")
    out = capsys.readouterr().out
    assert "SUMMARY file=x.csv rows=1" in out
    assert "WARN dup key" in out


def test_labeled_formatter_row_context():
    fmt = LabeledFormatter()
    rec = _record(logging.ERROR, "Order ID is required")
    rec.row = 3
    rec.order = "-"
    assert fmt.format(rec) == "ERROR row=3 order=- Order ID is required"


def test_row_context_via_extra(capsys):
    reset_logging()
    logger = setup_logging()
    logger.warning("low stock", extra={"row": 2, "order": "ORD001"})
    logger.info("done")
    out = capsys.readouterr().out
    assert "WARN row=2 order=ORD001 low stock" in out
    assert "INFO done" in out
