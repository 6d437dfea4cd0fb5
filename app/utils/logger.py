# app/utils/logger.py
"""
Logging setup shared by every module.

One root configuration: console plus a size-rotated file whose directory,
name and rotation limits come from Settings. SQLAlchemy's engine echo and
the HTTP client used by the health check are held at WARNING so request
logs stay readable at INFO.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
QUIET_LOGGERS = ("sqlalchemy.engine", "urllib3", "httpx")

_configured = False


def log_path() -> str:
    """Absolute path of the log file; a relative LOG_DIR is taken from the project root."""
    log_dir = settings.LOG_DIR
    if not os.path.isabs(log_dir):
        log_dir = os.path.join(PROJECT_ROOT, log_dir)
    return os.path.join(log_dir, settings.LOG_FILE)


def build_file_handler(path: str, level: str) -> RotatingFileHandler:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
        delay=True,
    )
    handler.setLevel(level)
    return handler


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    file_handler = build_file_handler(log_path(), level)
    file_handler.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)
    root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Named logger; the root handlers are installed on first use."""
    _configure_root_logger()
    return logging.getLogger(name)
