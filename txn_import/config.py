"""
txn_import/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_SYNC_BASE_URL = "http://localhost:5000/api"


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class SyncSettings:
    """
    Settings for the outbound transaction sync endpoint.
    """

    base_url: str = DEFAULT_SYNC_BASE_URL
    api_token: str | None = None
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class TransactionImportSettings:
    """
    Runtime settings for bulk transaction imports.
    """

    max_reported_validation_errors: int = 100
    log_validation_errors: bool = True
    date_fallback_enabled: bool = True
    date_fallback_dayfirst: bool = False


@lru_cache(maxsize=1)
def get_sync_settings() -> SyncSettings:
    """
    Return cached sync endpoint settings from environment variables.
    """

    return SyncSettings(
        base_url=_get_str_env("TXN_SYNC_BASE_URL", DEFAULT_SYNC_BASE_URL).rstrip("/"),
        api_token=_get_optional_str_env("TXN_SYNC_API_TOKEN"),
        timeout_seconds=max(1.0, _get_float_env("TXN_SYNC_TIMEOUT_SECONDS", 30.0)),
    )


@lru_cache(maxsize=1)
def get_transaction_import_settings() -> TransactionImportSettings:
    """
    Return cached import settings from environment variables.
    """

    return TransactionImportSettings(
        max_reported_validation_errors=max(1, _get_int_env("TXN_IMPORT_MAX_REPORTED_ERRORS", 100)),
        log_validation_errors=_get_bool_env("TXN_IMPORT_LOG_VALIDATION_ERRORS", True),
        date_fallback_enabled=_get_bool_env("TXN_IMPORT_DATE_FALLBACK_ENABLED", True),
        date_fallback_dayfirst=_get_bool_env("TXN_IMPORT_DATE_FALLBACK_DAYFIRST", False),
    )
