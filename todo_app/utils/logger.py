"""
Logging setup shared by every module of the task manager backend.

Key Features:
    - Console output plus one size-rotated log file per process run
    - Log files grouped in per-day directories under ``LOG_DIR``
    - Level taken from the ``LOG_LEVEL`` environment variable
    - File logging can be switched off with ``LOG_TO_FILE=false``
"""

import datetime
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE_BASENAME = "todo_app"

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() in ("1", "true", "yes")

MAX_LOG_SIZE_BYTES = 5 * 1024 * 1024
MAX_BACKUP_COUNT = 10
KEEP_LOG_DAYS = 7

# All loggers of one process share a single file handler
_shared_file_handler: logging.Handler | None = None


class SafeRotatingFileHandler(RotatingFileHandler):
    """Size-based rotation that keeps writing to the current file if rollover fails."""

    def doRollover(self):
        try:
            super().doRollover()
        except (OSError, PermissionError) as e:
            sys.stderr.write(
                f"Log rotation failed: {e}. Continuing with current log file.\n"
            )
            sys.stderr.flush()


def _get_log_level(level_str: str) -> int:
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def _get_shared_file_handler() -> logging.Handler:
    global _shared_file_handler
    if _shared_file_handler is None:
        now = datetime.datetime.now()
        date_dir = LOG_DIR / now.strftime("%Y-%m-%d")
        date_dir.mkdir(parents=True, exist_ok=True)
        log_file = (
            date_dir / f"{LOG_FILE_BASENAME}_{now.strftime('%Y-%m-%d_%H-%M-%S')}.log"
        )

        handler = SafeRotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_SIZE_BYTES,
            backupCount=MAX_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        _shared_file_handler = handler

        cleanup_old_logs(keep_days=KEEP_LOG_DAYS)
    return _shared_file_handler


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """Set up logger with both console and file handlers."""
    logger = logging.getLogger(name)
    log_level = _get_log_level(level or DEFAULT_LOG_LEVEL)
    logger.setLevel(log_level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    if LOG_TO_FILE:
        logger.addHandler(_get_shared_file_handler())

    return logger


def cleanup_old_logs(keep_days: int = KEEP_LOG_DAYS):
    """Delete per-day log directories older than ``keep_days``."""
    cutoff_time = datetime.datetime.now() - datetime.timedelta(days=keep_days)
    deleted_count = 0
    failed_count = 0

    for date_dir in LOG_DIR.iterdir():
        if not date_dir.is_dir():
            continue
        try:
            dir_date = datetime.datetime.strptime(date_dir.name, "%Y-%m-%d")
        except ValueError:
            # Not one of ours
            continue
        if dir_date >= cutoff_time:
            continue

        for log_file in date_dir.iterdir():
            try:
                log_file.unlink()
                deleted_count += 1
            except (PermissionError, FileNotFoundError):
                failed_count += 1
        try:
            date_dir.rmdir()
        except OSError:
            failed_count += 1

    if deleted_count > 0 or failed_count > 0:
        sys.stderr.write(
            f"Log cleanup completed: {deleted_count} files deleted, "
            f"{failed_count} failed\n"
        )
