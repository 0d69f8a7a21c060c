"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

DEFAULT_FILLER_PREFIXES: tuple[str, ...] = (
    "Curso de",
    "Carrera de",
    "Especialización en",
    "Taller de",
)


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


@dataclass(frozen=True)
class AuditSettings:
    """
    Runtime settings for the sales audit pipeline.

    ``revenue_target`` is carried through to the report untouched; the
    aggregation itself never depends on it.
    """

    revenue_target: float = 120_000_000.0
    activity_window_days: int = 30
    display_name_max_length: int = 20
    default_seller: str = "Sitio Web"
    default_product: str = "Sin Nombre"
    guarantee_marker: str = "garantiz"
    filler_prefixes: tuple[str, ...] = field(default=DEFAULT_FILLER_PREFIXES)
    max_rejections: int = 500
    log_rejections: bool = True


@lru_cache(maxsize=1)
def get_audit_settings() -> AuditSettings:
    """
    Return cached audit settings from environment variables.
    """

    return AuditSettings(
        revenue_target=_get_float_env("AUDIT_REVENUE_TARGET", 120_000_000.0),
        activity_window_days=max(1, _get_int_env("AUDIT_ACTIVITY_WINDOW_DAYS", 30)),
        display_name_max_length=max(1, _get_int_env("AUDIT_DISPLAY_NAME_MAX_LENGTH", 20)),
        default_seller=_get_str_env("AUDIT_DEFAULT_SELLER", "Sitio Web"),
        default_product=_get_str_env("AUDIT_DEFAULT_PRODUCT", "Sin Nombre"),
        guarantee_marker=_get_str_env("AUDIT_GUARANTEE_MARKER", "garantiz"),
        max_rejections=max(1, _get_int_env("AUDIT_MAX_REJECTIONS", 500)),
        log_rejections=_get_bool_env("AUDIT_LOG_REJECTIONS", True),
    )


def get_log_level() -> str:
    """
    Return the configured root log level name.
    """

    return _get_str_env("LOG_LEVEL", "INFO").upper()
