"""Cached settings access facade."""

from __future__ import annotations

import threading

from cniskel.config.schema import SkelSettings

_lock = threading.RLock()
_cache: dict[str, SkelSettings] = {}
_KEY = "settings"


def load_settings() -> SkelSettings:
    return SkelSettings()


def get_settings(*, force_reload: bool = False) -> SkelSettings:
    """Get settings with process-local cache and optional refresh."""
    with _lock:
        if force_reload or _KEY not in _cache:
            _cache[_KEY] = load_settings()
        return _cache[_KEY]


def clear_settings_cache() -> None:
    with _lock:
        _cache.clear()
