"""Logging configuration."""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from allie.core.config import settings

_logger: Optional[logging.Logger] = None


def _log_file() -> Optional[Path]:
    """``allie.log`` inside ALLIE_LOGS_PATH, or None for console-only logging."""
    logs_path = os.getenv("ALLIE_LOGS_PATH")
    return Path(logs_path) / "allie.log" if logs_path else None


def get_logger() -> logging.Logger:
    """Return the shared "allie" logger, attaching handlers on first use."""
    global _logger
    if _logger is not None:
        return _logger

    _logger = logging.getLogger("allie")
    _logger.setLevel(getattr(logging, settings.logging.level.upper(), logging.INFO))
    _logger.propagate = False
    _logger.handlers.clear()

    formatter = logging.Formatter(settings.logging.format)
    handlers = [logging.StreamHandler(sys.stdout)]

    log_file = _log_file()
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        _logger.addHandler(handler)

    return _logger


logger = get_logger()
