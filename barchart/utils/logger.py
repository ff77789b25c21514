"""Structured logging helpers shared by the encoder, renderer and API."""
from __future__ import annotations

import json
import logging
from logging import Logger
from pathlib import Path
from typing import Any, Dict

from barchart.config import get_settings

_LOGGER_CACHE: Dict[str, Logger] = {}
_EXTRA_PREFIX = "_extra_"


class JsonFormatter(logging.Formatter):
    """Render a log record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - standard override
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key.startswith(_EXTRA_PREFIX):
                payload[key[len(_EXTRA_PREFIX):]] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logger(name: str) -> Logger:
    """Return a logger writing human lines to stderr and JSON lines to ``LOG_PATH``.

    An empty ``LOG_PATH`` disables the file handler.
    """

    if name in _LOGGER_CACHE:
        return _LOGGER_CACHE[name]

    try:
        settings = get_settings()
        level, log_path = settings.log_level, settings.log_path
    except RuntimeError:
        level, log_path = "INFO", "logs/barchart.log"

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter(fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(console_handler)

    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)

    _LOGGER_CACHE[name] = logger
    return logger


def log_extra(**kwargs: Any) -> Dict[str, Any]:
    """Wrap structured fields so only the JSON file handler picks them up."""

    return {f"{_EXTRA_PREFIX}{key}": value for key, value in kwargs.items()}
