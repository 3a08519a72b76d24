# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from taskflow_console.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("taskflow_console.view.controller", logging.INFO, True),
        ("taskflow_console.cli.main", logging.DEBUG, True),
        ("taskflow_console.services.entity_service", logging.INFO, False),
        ("taskflow_console.services.store", logging.WARNING, True),
        ("taskflow_console.data.fixtures", logging.INFO, False),
        ("taskflow_console.data.fixtures", logging.WARNING, True),
        ("py.warnings", logging.WARNING, False),
        ("asyncio", logging.WARNING, False),
        ("asyncio", logging.ERROR, True),
    ],
)
def test_console_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


def test_setup_logging_writes_file(tmp_path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("taskflow_console.services.store").debug("seeded")
        for h in root.handlers:
            h.flush()
        assert log_file == tmp_path / "logs" / "taskflow.log"
        assert "taskflow_console.services.store: seeded" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
        logging.captureWarnings(False)
