"""Runtime settings read from the environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

ENDPOINT_ENV = "MINEFIELD_LEADERBOARD_URL"
LOG_LEVEL_ENV = "MINEFIELD_LOG_LEVEL"
_PLACEHOLDER_ENDPOINT = "YOUR_GOOGLE_APPS_SCRIPT_URL_HERE"


@dataclass(frozen=True)
class Settings:
    leaderboard_url: str | None = None
    log_level: int = logging.INFO

    @property
    def leaderboard_enabled(self) -> bool:
        return bool(self.leaderboard_url)


def _coerce_level(value: str | None) -> int:
    if not value:
        return logging.INFO
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else logging.INFO


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build settings; a missing or placeholder endpoint disables the leaderboard."""
    source = os.environ if env is None else env
    url = (source.get(ENDPOINT_ENV) or "").strip()
    if not url or url == _PLACEHOLDER_ENDPOINT:
        url = None
    return Settings(leaderboard_url=url, log_level=_coerce_level(source.get(LOG_LEVEL_ENV)))
