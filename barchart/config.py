"""Chart settings (canvas, margins, axes, logging) read from the environment or a local .env file."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


_load_dotenv()


def _bool_env(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _int_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _float_env(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class Settings:
    """Runtime configuration values sourced from environment variables."""

    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Team Scores"))

    outer_width: int = field(default_factory=lambda: _int_env("CHART_OUTER_WIDTH", 600))
    outer_height: int = field(default_factory=lambda: _int_env("CHART_OUTER_HEIGHT", 300))
    margin_top: int = field(default_factory=lambda: _int_env("CHART_MARGIN_TOP", 20))
    margin_right: int = field(default_factory=lambda: _int_env("CHART_MARGIN_RIGHT", 20))
    margin_bottom: int = field(default_factory=lambda: _int_env("CHART_MARGIN_BOTTOM", 70))
    margin_left: int = field(default_factory=lambda: _int_env("CHART_MARGIN_LEFT", 40))

    band_padding: float = field(default_factory=lambda: _float_env("CHART_BAND_PADDING", 0.33))
    tick_count: int = field(default_factory=lambda: _int_env("CHART_TICK_COUNT", 5))
    show_category_labels: bool = field(default_factory=lambda: _bool_env("CHART_SHOW_CATEGORY_LABELS", False))
    # d3 style range [height, 0]: first record ends up at the bottom
    reverse_categories: bool = field(default_factory=lambda: _bool_env("CHART_REVERSE_CATEGORIES", True))

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_path: str = field(default_factory=lambda: os.getenv("LOG_PATH", "logs/barchart.log"))


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    if settings.log_level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
        raise RuntimeError(f"Unsupported log level: {settings.log_level}")
    return settings
