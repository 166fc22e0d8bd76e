"""
Logging configuration.

Emits human-readable console logs and, optionally, rotating text and
JSON log files. JSON logs include:
- Timestamp
- Level
- Logger name
- Scenario
- Configuration path and failure reason (for config errors)
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

PACKAGE_LOGGER = "dragon_hatchery"

_STRUCTURED_FIELDS = ("scenario", "config_path", "reason")


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class HumanFormatter(logging.Formatter):
    """Human-readable format with colors."""

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname[:4]

        prefix_parts = [f"{timestamp} {level}", f"[{record.name.rsplit('.', 1)[-1]}]"]
        scenario = getattr(record, "scenario", None)
        if scenario:
            prefix_parts.append(f"scenario={scenario}")

        line = f"{' '.join(prefix_parts)}: {record.getMessage()}"

        if self.use_colors and sys.stderr.isatty():
            color = self.COLORS.get(record.levelname, "")
            line = f"{color}{line}{self.RESET}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def configure_logging(
    level: str = "INFO",
    log_dir: Optional[str] = None,
    json_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files
        json_file: Path for JSON logs (in log_dir if relative)
        max_bytes: Max size per log file
        backup_count: Number of backup files to keep
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers = []

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(HumanFormatter())
    root_logger.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        human_handler = RotatingFileHandler(
            os.path.join(log_dir, "hatchery.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        human_handler.setFormatter(HumanFormatter(use_colors=False))
        root_logger.addHandler(human_handler)

        json_path = json_file or os.path.join(log_dir, "hatchery.json.log")
        if not os.path.isabs(json_path):
            json_path = os.path.join(log_dir, json_path)

        json_handler = RotatingFileHandler(
            json_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        json_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(json_handler)


def set_debug_logging(enabled: bool) -> None:
    """
    Toggle debug records of this package.

    The root logger's handlers must accept DEBUG for the records to
    show up; configure_logging leaves handler levels unset.
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if enabled else logging.INFO)


def is_debug_logging() -> bool:
    return logging.getLogger(PACKAGE_LOGGER).getEffectiveLevel() <= logging.DEBUG
