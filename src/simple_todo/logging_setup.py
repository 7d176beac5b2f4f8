# src/simple_todo/logging_setup.py

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3


class _ReplFilter(logging.Filter):
    """
    Console filter for the task REPL.

    Command replies and reminder lines are printed on stdout, so stderr logs
    share the screen with the "> " prompt. Outside verbose mode only startup
    and shutdown messages (simple_todo.cli.*) are shown at INFO; the store,
    storage and the reminder thread need WARNING+ to reach the console.
    Everything still goes to the log file.
    """

    def __init__(self, *, verbose: bool = False) -> None:
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("simple_todo."):
            if self.verbose or name.startswith("simple_todo.cli."):
                return True
            return record.levelno >= logging.WARNING

        # py.warnings and third-party loggers
        return record.levelno >= logging.ERROR


def log_file_path(log_dir: str | Path, app_name: str = "simple-todo") -> Path:
    safe = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in app_name) or "simple-todo"
    return Path(log_dir) / f"{safe}.log"


def setup_logging(
    *,
    log_dir: str | Path = ".local/simple_todo",
    app_name: str = "simple-todo",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure logging for the interactive app:
    - stderr handler, filtered so the REPL stays readable (DEBUG console level = verbose)
    - rotating file handler next to the task database, named after the app

    Call this ONCE, before the first logger.info. Returns the log file path.
    """
    log_file = log_file_path(log_dir, app_name)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s [%(threadName)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ReplFilter(verbose=console_level <= logging.DEBUG))
    root.addHandler(ch)

    fh = logging.handlers.RotatingFileHandler(
        str(log_file),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
