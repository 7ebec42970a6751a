from __future__ import annotations

import threading
import time
from datetime import date
from typing import Any

from .config import DEFAULT_MENU_CONFIG

_cache: dict[tuple[str, str, str], dict[str, Any]] = {}
_lock = threading.Lock()
_hits: int = 0
_misses: int = 0


def _make_key(slug: str, meal: str, day: date) -> tuple[str, str, str]:
    return (slug, meal, day.isoformat())


def cache_get(slug: str, meal: str, day: date, ttl: int = DEFAULT_MENU_CONFIG.cache_ttl) -> Any | None:
    global _hits, _misses
    key = _make_key(slug, meal, day)
    with _lock:
        entry = _cache.get(key)
        if entry and time.time() - entry["created_at"] < ttl:
            _hits += 1
            return entry["value"]
        if entry:
            del _cache[key]
        _misses += 1
        return None


def cache_set(slug: str, meal: str, day: date, value: Any) -> None:
    with _lock:
        _cache[_make_key(slug, meal, day)] = {"value": value, "created_at": time.time()}


def get_cache_stats() -> dict:
    with _lock:
        size, hits, misses = len(_cache), _hits, _misses
    total = hits + misses
    return {
        "size": size,
        "hits": hits,
        "misses": misses,
        "hit_rate": round(hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses
    with _lock:
        _cache.clear()
        _hits = 0
        _misses = 0
