# src/project_reloader/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow project_reloader logs, but keep the per-refresh DEBUG lines of the
      loaders in the file only
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress third-party noise unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("project_reloader."):
            if name.startswith("project_reloader.reloading.loaders"):
                return record.levelno >= logging.INFO
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _configured(handler: logging.Handler, level: int, *filters: logging.Filter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    for f in filters:
        handler.addFilter(f)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/reloader",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route every log record to stderr (filtered) and to <log_dir>/reloader.log (unfiltered).

    Replaces whatever handlers the root logger had. Returns the log file path.
    """
    log_file = Path(log_dir) / "reloader.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)

    root.setLevel(min(console_level, file_level))
    root.addHandler(_configured(logging.StreamHandler(sys.stderr), console_level, _ConsoleNoiseFilter()))
    root.addHandler(_configured(logging.FileHandler(log_file, encoding="utf-8"), file_level))

    logging.captureWarnings(True)
    return log_file
