from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from .cache import cache_get, cache_set
from .config import DEFAULT_MENU_CONFIG, MenuConfig

logger = logging.getLogger(__name__)


class MenuUnavailableError(RuntimeError):
    """Raised when a venue's menu cannot be fetched."""


def build_menu_url(slug: str, meal: str, day: date, config: MenuConfig = DEFAULT_MENU_CONFIG) -> str:
    if not config.url_template:
        raise MenuUnavailableError("MENU_API_URL_TEMPLATE is not configured")
    return config.url_template.format(slug=slug, meal=meal, date=day.isoformat())


def fetch_menu(
    slug: str,
    meal: str,
    day: date,
    config: MenuConfig = DEFAULT_MENU_CONFIG,
) -> Any:
    """
    Fetch the raw menu payload for one venue, meal period and date.

    Successful payloads are cached for ``config.cache_ttl`` seconds.
    Raises MenuUnavailableError on any transport, status or decoding error.
    """
    cached = cache_get(slug, meal, day, ttl=config.cache_ttl)
    if cached is not None:
        return cached

    url = build_menu_url(slug, meal, day, config)
    try:
        resp = httpx.get(url, timeout=config.timeout)
        resp.raise_for_status()
        payload = resp.json()
    except httpx.HTTPError as exc:
        raise MenuUnavailableError(f"menu fetch failed for {slug}: {exc}") from exc
    except ValueError as exc:
        raise MenuUnavailableError(f"menu response for {slug} was not JSON") from exc

    logger.debug("Fetched %s menu for %s on %s", meal, slug, day)
    cache_set(slug, meal, day, payload)
    return payload
