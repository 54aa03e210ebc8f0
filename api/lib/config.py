"""
Runtime configuration for the stoppage API.

Values come from the process environment (populated from `.env.local` by
local_server.py). Nothing here is read implicitly by the fetch layer or the
inference core; callers build an AppConfig and pass it down.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .stoppage_core import IMPLICIT_STOPPAGE_THRESHOLD_SECONDS
from .schedule import SOON_HORIZON_HOURS


DEFAULT_RAPID_API_HOST = "nfl-api-data.p.rapidapi.com"
DEFAULT_PORT = 3001
DEFAULT_DAY = "20181213"
MAX_SOON_HORIZON_HOURS = 24 * 30


@dataclass(frozen=True)
class RapidApiConfig:
    api_key: Optional[str]
    host: str = DEFAULT_RAPID_API_HOST


@dataclass(frozen=True)
class AppConfig:
    rapidapi: RapidApiConfig
    port: int = DEFAULT_PORT
    default_day: str = DEFAULT_DAY
    stoppage_threshold_seconds: int = IMPLICIT_STOPPAGE_THRESHOLD_SECONDS
    soon_horizon_hours: float = SOON_HORIZON_HOURS


def _positive_int(raw: Optional[str], fallback: int) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


def _positive_float(raw: Optional[str], fallback: float, maximum: Optional[float] = None) -> float:
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return fallback
    # horizon feeds timedelta(hours=...): finite and bounded only
    if not math.isfinite(value) or value <= 0:
        return fallback
    if maximum is not None and value > maximum:
        return fallback
    return value


def is_valid_day(day: Optional[str]) -> bool:
    """RapidAPI scoreboard days are YYYYMMDD."""
    return isinstance(day, str) and len(day) == 8 and day.isdigit()


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    env = os.environ if environ is None else environ

    default_day = (env.get("DEFAULT_DAY") or "").strip()
    if not is_valid_day(default_day):
        default_day = DEFAULT_DAY

    return AppConfig(
        rapidapi=RapidApiConfig(
            api_key=env.get("RAPID_API_KEY") or None,
            host=env.get("RAPID_API_HOST") or DEFAULT_RAPID_API_HOST,
        ),
        port=_positive_int(env.get("PORT"), DEFAULT_PORT),
        default_day=default_day,
        stoppage_threshold_seconds=_positive_int(
            env.get("STOPPAGE_THRESHOLD_SECONDS"), IMPLICIT_STOPPAGE_THRESHOLD_SECONDS
        ),
        soon_horizon_hours=_positive_float(
            env.get("SOON_HORIZON_HOURS"), SOON_HORIZON_HOURS, maximum=MAX_SOON_HORIZON_HOURS
        ),
    )


def resolve_day(day: Optional[str], config: AppConfig) -> str:
    return day if is_valid_day(day) else config.default_day
