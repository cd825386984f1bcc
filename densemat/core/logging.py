"""
Logging for densemat.

Library modules log through context loggers (get_context_logger), attaching
shapes and operand counts as ``extra_data``. Nothing is printed until
setup_logging() installs handlers on the ``densemat`` package logger, which
the command-line front end does.
"""

import sys
import logging
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import json
from pathlib import Path

from .config import settings

PACKAGE_LOGGER = "densemat"


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra_data", {})


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with the context merged in"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """``LEVEL logger: message key=value ...``"""

    def __init__(self):
        super().__init__(fmt="%(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{key}={value}" for key, value in context.items())
        return line


def _build_handlers(formatter: logging.Formatter) -> List[logging.Handler]:
    # stderr keeps diagnostics out of printed matrices
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Install handlers on the ``densemat`` logger, replacing earlier ones.

    Args:
        level: Level name; defaults to settings.LOG_LEVEL

    Returns:
        The configured package logger
    """
    level_name = level or settings.LOG_LEVEL
    formatter = StructuredFormatter() if settings.LOG_FORMAT == "json" else TextFormatter()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(formatter):
        package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level_name.upper(), logging.WARNING))
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger that merges its fixed context with per-call ``extra_data``"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = kwargs.pop("extra_data", {})
        kwargs.setdefault("extra", {})["extra_data"] = {**self.extra, **extra_data}
        return msg, kwargs


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """Get logger with permanent context"""
    return LoggerAdapter(get_logger(name), context)
