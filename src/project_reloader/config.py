# src/project_reloader/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a default, so nothing is required at import time.
- Malformed values fall back to defaults instead of crashing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "RELOADER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float, *, allow_zero: bool = False) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    if val > 0 or (allow_zero and val == 0):
        return val
    return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str = "project-reloader"
    log_level: str = "INFO"
    log_dir: Path = Path(".local/reloader")

    # ---- Scheduling ----
    reload_period_seconds: float = 15.0
    status_initial_delay_seconds: float = 1.0
    status_period_seconds: float = 15.0
    shutdown_grace_seconds: float = 60.0

    # ---- Worker pool ----
    pool_size: int = 0  # 0 -> sized from the task count
    allow_overlap: bool = False

    @staticmethod
    def from_env() -> "Settings":
        defaults = Settings()

        pool_size = _env_int(_k("POOL_SIZE"), defaults.pool_size)
        if pool_size < 0:
            pool_size = defaults.pool_size

        return Settings(
            app_name=_env(_k("APP_NAME"), defaults.app_name) or defaults.app_name,
            log_level=_env(_k("LOG_LEVEL"), defaults.log_level),
            log_dir=_env_path(_k("LOG_DIR"), defaults.log_dir),
            reload_period_seconds=_env_float(_k("RELOAD_PERIOD_SECONDS"), defaults.reload_period_seconds),
            status_initial_delay_seconds=_env_float(
                _k("STATUS_INITIAL_DELAY_SECONDS"),
                defaults.status_initial_delay_seconds,
                allow_zero=True,
            ),
            status_period_seconds=_env_float(_k("STATUS_PERIOD_SECONDS"), defaults.status_period_seconds),
            shutdown_grace_seconds=_env_float(
                _k("SHUTDOWN_GRACE_SECONDS"),
                defaults.shutdown_grace_seconds,
                allow_zero=True,
            ),
            pool_size=pool_size,
            allow_overlap=_env_bool(_k("ALLOW_OVERLAP"), defaults.allow_overlap),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
