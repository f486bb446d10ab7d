"""JSON logging setup for scripts using the analysis package."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# LogRecord attributes that are not user-supplied `extra` fields
RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "exc_info",
    "exc_text", "stack_info", "taskName",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with `extra` fields inlined."""

    def format(self, record):
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in RESERVED_ATTRS and not key.startswith("_"):
                log_obj[key] = value
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


def setup_logging(log_dir: Optional[str] = "logs", prefix: str = "analysis",
                  level: int = logging.DEBUG) -> Optional[Path]:
    """
    Attach a JSON file handler and a plain console handler to the root logger.

    Args:
        log_dir: Directory for the JSON log file; None disables the file handler
        prefix: Log file name prefix
        level: Root logger level

    Returns:
        Path of the JSON log file, or None without a file handler
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    log_file = None
    if log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"{prefix}_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}.json"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    return log_file
