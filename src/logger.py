"""
Application Logging Module.

Builds the application logger used across the code base. Call sites log
dictionaries (``{"message": ..., "repository": ...}``) so that every record
carries its context; the file handler writes those records as JSON lines
while the console handler renders them for humans.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict


class JsonLineFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Render dict payloads as ``message (key=value, ...)``."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-8s %(message)s", "%H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            fields = dict(record.msg)
            message = str(fields.pop("message", ""))
            if fields:
                context = ", ".join(f"{key}={value}" for key, value in fields.items())
                message = f"{message} ({context})"
            record.message = message
        return super().formatMessage(record)


class LogManager:
    """
    Configure and expose the application logger.

    Attributes:
        logger (logging.Logger): Configured logger instance
    """

    def __init__(
        self,
        app_name: str,
        log_dir: str = "logs",
        development: bool = False,
        level: int = logging.DEBUG,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ):
        """
        Initialize the logger with file and console handlers.

        Args:
            app_name (str): Logger name, also used for the log file name
            log_dir (str): Directory for log files
            development (bool): Echo every record to the console when True,
                otherwise only warnings and above
            level (int): Logging level for the logger and file handler
            max_bytes (int): Size at which the log file is rotated
            backup_count (int): Number of rotated files to keep
        """
        self.logger = logging.getLogger(app_name)
        self.logger.setLevel(level)

        # Re-instantiation must not stack handlers
        if self.logger.handlers:
            return

        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, f"{app_name}.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(JsonLineFormatter())
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level if development else logging.WARNING)
        console_handler.setFormatter(ConsoleFormatter())
        self.logger.addHandler(console_handler)
