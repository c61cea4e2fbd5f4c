"""Runtime configuration.

Settings come from ``IMS_*`` environment variables. A ``.env`` file in the
working directory is loaded first (without overriding variables that are
already set), so local development needs no exported shell state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_DATABASE_URL = f"sqlite:///{_PROJECT_ROOT / 'data' / 'ims.db'}"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigurationError(Exception):
    """An ``IMS_*`` variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    db_timeout: float = 5.0
    log_level: str = "INFO"
    retry_attempts: int = 3
    retry_backoff: float = 0.05
    echo_sql: bool = False


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative, got {raw!r}")
    return value


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {raw!r}")
    return value


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ``env`` (defaults to ``os.environ`` after .env)."""
    if env is None:
        load_dotenv(override=False)
        env = os.environ

    log_level = env.get("IMS_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"IMS_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")

    return Settings(
        database_url=env.get("IMS_DATABASE_URL", DEFAULT_DATABASE_URL),
        db_timeout=_float(env, "IMS_DB_TIMEOUT", 5.0),
        log_level=log_level,
        retry_attempts=_int(env, "IMS_RETRY_ATTEMPTS", 3),
        retry_backoff=_float(env, "IMS_RETRY_BACKOFF", 0.05),
        echo_sql=_bool(env, "IMS_ECHO_SQL", False),
    )
