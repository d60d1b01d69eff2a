"""
activation_app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


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
    Ensure project `.env` files are loaded once before reading app settings.
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
class UploadSettings:
    """
    Runtime settings for membership CSV uploads.
    """

    log_validation_errors: bool = True


@dataclass(frozen=True)
class ActivationAPISettings:
    """
    Remote activation endpoint settings.

    ``max_concurrency`` of 0 means one worker per row.
    """

    base_url: str = "http://localhost/api/"
    token: str | None = None
    action: str = "user_add_level"
    timeout_seconds: float = 30.0
    max_concurrency: int = 0


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        log_validation_errors=_get_bool_env("UPLOAD_LOG_VALIDATION_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_activation_api_settings() -> ActivationAPISettings:
    """
    Return cached activation endpoint settings from environment variables.
    """

    return ActivationAPISettings(
        base_url=_get_str_env("ACTIVATION_API_BASE_URL", "http://localhost/api/"),
        token=_get_optional_str_env("ACTIVATION_API_TOKEN"),
        action=_get_str_env("ACTIVATION_API_ACTION", "user_add_level"),
        timeout_seconds=max(1.0, _get_float_env("ACTIVATION_HTTP_TIMEOUT_SECONDS", 30.0)),
        max_concurrency=max(0, _get_int_env("ACTIVATION_MAX_CONCURRENCY", 0)),
    )
