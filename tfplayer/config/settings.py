"""Environment-backed defaults for the player."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Global settings loaded from environment variables."""

    log_level: int = logging.WARNING
    image_extension: str = ".png"


def load_settings_from_env() -> Settings:
    """Load settings from process environment with safe fallbacks."""
    return Settings(
        log_level=_read_log_level_env("TFPLAYER_LOG_LEVEL", logging.WARNING),
        image_extension=_read_str_env("TFPLAYER_IMAGE_EXTENSION", ".png"),
    )


def _read_log_level_env(key: str, default_value: int) -> int:
    raw_value = os.getenv(key)
    if raw_value is None or not raw_value.strip():
        return default_value
    level = logging.getLevelName(raw_value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Environment variable {key} must be a logging level name.")
    return level


def _read_str_env(key: str, default_value: str) -> str:
    raw_value = os.getenv(key)
    if raw_value is None or not raw_value.strip():
        return default_value
    return raw_value.strip()
