"""
pinch.logger
Logging setup for the pinch CLI.

configure_logging() installs a JSON-lines file handler in the config directory and
a stderr console handler for warnings, then archives yesterday's log file and prunes
old archives. It is called once by the CLI entry callback; library code only ever
asks for child loggers of "pinch".
"""

from datetime import datetime
import logging
from logging import Logger as T_Logger
from logging.config import dictConfig
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter  # type: ignore # noqa F401

from pinch.config import PinchSettings

LOG_FILE_NAME = "pinch.jsonl"
ARCHIVE_STAMP = "%Y%m%d_%H%M%S"

logger: T_Logger = logging.getLogger("pinch")
system_logger = logger.getChild("SYSTEM")


def build_config(log_file_path: Path, log_level: str) -> dict:
    """Return the dictConfig mapping for the given log file and level."""
    level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "standard": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_file_path),
                "formatter": "json",
                "level": level,
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": "WARNING",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "pinch": {
                "handlers": ["file", "console"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(settings: PinchSettings) -> T_Logger:
    """Configure the "pinch" logger hierarchy from settings."""
    log_file_path = settings.logs_dir / LOG_FILE_NAME
    log_file_path.parent.mkdir(parents=True, exist_ok=True)
    _archive_daily_log_file(log_file_path)
    _manage_logfile_archives(log_file_path)
    dictConfig(build_config(log_file_path, settings.log_level))
    system_logger.debug("Logger for pinch initialized.")
    return logger


def _archive_daily_log_file(log_file_path: Path) -> None:
    """Archive the log file once a day by renaming it with its last write time."""
    if not log_file_path.exists() or log_file_path.stat().st_size == 0:
        return
    last_write = datetime.fromtimestamp(log_file_path.stat().st_mtime)
    if last_write.date() >= datetime.now().date():
        return
    archive_path = log_file_path.with_name(
        f"{log_file_path.stem}_{last_write.strftime(ARCHIVE_STAMP)}.jsonl"
    )
    log_file_path.rename(archive_path)


def _manage_logfile_archives(log_file_path: Path, days_to_keep: int = 10) -> None:
    """Keep only the most recent `days_to_keep` archives."""
    archive_files = sorted(
        log_file_path.parent.glob(f"{log_file_path.stem}_*.jsonl"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )
    for archive_file in archive_files[days_to_keep:]:
        archive_file.unlink()
