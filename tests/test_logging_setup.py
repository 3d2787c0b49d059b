# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from weeklyctl.logging_setup import setup_logging


def test_console_level_follows_verbose(restore_root_logger: None) -> None:
    setup_logging(verbose=False)
    (console,) = logging.getLogger().handlers
    assert console.level == logging.WARNING

    setup_logging(verbose=True)
    (console,) = logging.getLogger().handlers
    assert console.level == logging.INFO


def test_console_filters_foreign_loggers(restore_root_logger: None) -> None:
    setup_logging()
    (console,) = logging.getLogger().handlers

    def record(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert console.filter(record("weeklyctl.engine.weekly", logging.WARNING))
    assert not console.filter(record("urllib3", logging.WARNING))
    assert console.filter(record("urllib3", logging.ERROR))


def test_file_handler_gets_debug_records(restore_root_logger: None, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "weeklyctl.log"
    setup_logging(log_file=log_file)

    logging.getLogger("weeklyctl.test").debug("written to file only")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "written to file only" in log_file.read_text(encoding="utf-8")
