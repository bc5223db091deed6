"""Runtime settings sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    log_level: str
    items_per_page: int
    max_items_per_page: int
    change_log_enabled: bool
    audit_trail_enabled: bool


def _normalize_bool(value: str | None, default: bool = True) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _positive_int(value: str | None, default: int) -> int:
    """Return a positive integer from an environment value, else ``default``."""
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings."""
    items_per_page = _positive_int(os.getenv("PAGINATION_ITEMS_PER_PAGE"), 30)
    max_items_per_page = _positive_int(os.getenv("PAGINATION_MAX_ITEMS_PER_PAGE"), 100)
    return Settings(
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        items_per_page=min(items_per_page, max_items_per_page),
        max_items_per_page=max_items_per_page,
        change_log_enabled=_normalize_bool(os.getenv("CHANGE_LOG_ENABLED"), default=True),
        audit_trail_enabled=_normalize_bool(os.getenv("AUDIT_TRAIL_ENABLED"), default=True),
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
