# src/taskflow_console/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "taskflow_console"

# Lowest level shown on the console per logger prefix; first match wins.
# The mock backend and fixture loader log every call, so they only surface
# when something goes wrong.
CONSOLE_FLOORS: tuple[tuple[str, int], ...] = (
    (f"{APP_LOGGER}.services.", logging.WARNING),
    (f"{APP_LOGGER}.data.", logging.WARNING),
    (f"{APP_LOGGER}.", logging.NOTSET),
)


class _ConsoleNoiseFilter(logging.Filter):
    """Keeps REPL output readable; anything outside the app needs ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        for prefix, floor in CONSOLE_FLOORS:
            if record.name.startswith(prefix):
                return record.levelno >= floor
        # py.warnings and third-party loggers.
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskflow",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logs to `<log_dir>/taskflow.log` and a filtered stderr handler.

    Call once from the entrypoint, before the first log line. Returns the log
    file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskflow.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return log_file
