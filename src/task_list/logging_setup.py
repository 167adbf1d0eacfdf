# src/task_list/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep stderr readable next to JSON on stdout:
    - allow task_list logs (level is decided by the handler)
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress any third-party logger unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "task_list" or name.startswith("task_list."):
            return True

        return record.levelno >= logging.ERROR


def _file_handler(log_file: Path, level: int, fmt: logging.Formatter) -> logging.Handler | None:
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as exc:
        logger.warning("Log file %s is not writable (%s); logging to stderr only", log_file, exc)
        return None
    fh.setLevel(level)
    fh.setFormatter(fmt)
    return fh


def setup_logging(
    *,
    log_file: str | Path | None = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route logging for one command run.

    stderr gets the filtered console handler, so stdout carries nothing but
    JSON results. With log_file set, a debug-level file handler is added too;
    a log path that cannot be opened only costs the file handler, never the
    command.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    if log_file is not None:
        fh = _file_handler(Path(log_file), file_level, fmt)
        if fh is not None:
            root.addHandler(fh)

    # warnings.warn(...) arrives as 'py.warnings'
    logging.captureWarnings(True)
