# utils/logger.py
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

ROOT_LOGGER = "n8nlint"
LOG_FILE = "n8nlint.log"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# highest threshold first; DEBUG stays uncolored
_COLORS = (
    (logging.ERROR, "\033[91m"),    # red
    (logging.WARNING, "\033[93m"),  # yellow
    (logging.INFO, "\033[92m"),     # green
)


def _env_level(default: int = logging.WARNING) -> int:
    """LOG_LEVEL by name (DEBUG, INFO, ...); unknown names fall back to default."""
    name = os.getenv("LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


class _ColorFormatter(logging.Formatter):
    """Wraps the formatted record in ANSI colors when the stream is a terminal."""

    def __init__(self, stream, **kwargs):
        super().__init__(**kwargs)
        self._tty = getattr(stream, "isatty", lambda: False)()

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if not self._tty:
            return msg
        for threshold, color in _COLORS:
            if record.levelno >= threshold:
                return f"{color}{msg}\033[0m"
        return msg


def _stream_handler(level: int) -> logging.Handler:
    # stderr: stdout carries the validation report (and --json output)
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(_ColorFormatter(sys.stderr, fmt=_FORMAT, datefmt=_DATEFMT))
    return sh


def _file_handler(log_dir: Path, level: int, max_mb: int, backups: int) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(
        filename=str(log_dir / LOG_FILE),
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backups,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    return fh


def init_logger(
    level: int | None = None,
    log_dir: str | Path | None = None,
    file_max_mb: int = 5,
    file_backup: int = 3,
) -> logging.Logger:
    """
    (Re)configure the `n8nlint` logger that every module logs under.

    Replaces any handlers from an earlier call, so the CLI can call it once
    per command with that command's --verbose / --log-dir.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = False

    lvl = level if level is not None else _env_level()
    logger.setLevel(lvl)
    logger.addHandler(_stream_handler(lvl))
    if log_dir:
        logger.addHandler(_file_handler(Path(log_dir), lvl, file_max_mb, file_backup))

    return logger


def get_logger(child: str) -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER).getChild(child)
