# sitwatch/utils/log.py
# Handlers for the sitwatch-watch command. The watch engine only emits to
# "sitwatch.*" loggers (swallowed feed/callback failures, deprecation
# notices); this module decides where those lines end up: stderr always,
# plus logs/sitwatch.log when LOG_TO_FILE=true.

from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FMT = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

_INITIALIZED = False


def _level() -> int:
    lvl = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def _file_handler() -> RotatingFileHandler:
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_dir / "sitwatch.log",
        maxBytes=int(os.getenv("LOG_MAX_BYTES", "1048576")),
        backupCount=int(os.getenv("LOG_BACKUPS", "5")),
        encoding="utf-8",
    )


def _init_root() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return

    lvl = _level()
    root = logging.getLogger()
    root.setLevel(lvl)
    for h in list(root.handlers):
        root.removeHandler(h)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if os.getenv("LOG_TO_FILE", "false").lower() == "true":
        handlers.append(_file_handler())
    for h in handlers:
        h.setLevel(lvl)
        h.setFormatter(_FMT)
        root.addHandler(h)

    _INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Install the console (and optional file) handlers once, then return *name*."""
    _init_root()
    return logging.getLogger(name)
