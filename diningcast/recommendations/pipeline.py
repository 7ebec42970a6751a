from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone

from ..analytics.store import RUN_EVENT, record_event
from ..meals.clock import local_now, meal_period
from ..menus.client import MenuUnavailableError, fetch_menu
from ..menus.config import DEFAULT_MENU_CONFIG, MenuConfig
from ..menus.models import TaggedMenuItem
from ..menus.normalizer import normalize_menu
from ..menus.tagger import tag_menu
from ..weather.classifier import weather_tags
from ..weather.client import fetch_weather
from ..weather.config import DEFAULT_WEATHER_CONFIG, WeatherConfig
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .data_store import get_venues, save_recommendation
from .models import (
    Pick,
    RecommendationRecord,
    RecommendationResponse,
    Venue,
    WeatherOut,
)
from .reasons import compose_reason
from .scoring import score_venue, select_picks

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8


def distance_miles(
    origin: tuple[float, float] | None,
    lat: float | None,
    lon: float | None,
) -> float | None:
    """Great-circle distance, or None when either end is unknown."""
    if origin is None or lat is None or lon is None:
        return None
    lat1, lon1 = map(math.radians, origin)
    lat2, lon2 = math.radians(lat), math.radians(lon)
    a = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(a))


def _resolve_menu(
    venue: Venue,
    meal: str,
    day: date,
    config: MenuConfig,
) -> tuple[list[TaggedMenuItem], bool]:
    """Return (tagged menu, failed). A failure leaves this venue with an empty menu."""
    try:
        if venue.menu_source == "external":
            if not venue.menu_slug:
                raise MenuUnavailableError(f"venue {venue.id} has no menu slug")
            raw = fetch_menu(venue.menu_slug, meal, day, config)
        else:
            raw = venue.raw_menu_items
        return tag_menu(normalize_menu(venue.menu_source, raw)), False
    except Exception:
        logger.warning(
            "Menu unavailable for venue %s, scoring it with an empty menu",
            venue.id,
            exc_info=True,
        )
        return [], True


def _resolve_menus(
    venues: list[Venue],
    meal: str,
    day: date,
    config: MenuConfig,
) -> list[tuple[list[TaggedMenuItem], bool]]:
    if not venues:
        return []
    workers = max(1, min(config.workers, len(venues)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in venue order once every venue has resolved or failed
        return list(pool.map(lambda v: _resolve_menu(v, meal, day, config), venues))


def get_recommendations(
    now: datetime | None = None,
    origin: tuple[float, float] | None = None,
    ranking: RankingConfig = DEFAULT_RANKING_CONFIG,
    menu_config: MenuConfig = DEFAULT_MENU_CONFIG,
    weather_config: WeatherConfig = DEFAULT_WEATHER_CONFIG,
) -> RecommendationResponse:
    """
    Run one full recommendation pass.

    Weather failures propagate: without weather there are no desired tags.
    Menu failures are isolated per venue.
    """
    start_time = time.time()

    # 1. Weather, desired tags and meal period
    observation = fetch_weather(weather_config)
    condition = observation.condition
    desired = weather_tags(condition, observation.temperature_c)
    now = now or local_now(weather_config.timezone)
    meal = meal_period(now)
    weather_out = WeatherOut.model_validate(observation.to_dict())

    # 2. Venues
    venues = get_venues()
    if ranking.open_only:
        venues = [v for v in venues if v.is_open]

    # 3. Menus, then 4. scores
    resolved = _resolve_menus(venues, meal, now.date(), menu_config)
    results = [
        score_venue(venue, menu, desired)
        for venue, (menu, _) in zip(venues, resolved)
    ]
    menu_failures = sum(1 for _, failed in resolved if failed)

    # 5-6. Rank and select
    selected, fallback = select_picks(results, ranking)
    if fallback:
        logger.info("No venue scored above zero, returning all venues ranked by score")

    # 7. Reasons
    by_id = {venue.id: venue for venue in venues}
    picks: list[Pick] = []
    for result in selected:
        venue = by_id[result.venue_id]
        reason = compose_reason(
            condition,
            observation.temperature_c,
            result.matched_tags,
            wait_text=venue.wait_minutes_text,
            distance_miles=distance_miles(origin, venue.latitude, venue.longitude),
            sample_items=result.sample_items,
            fallback=fallback,
        )
        picks.append(Pick(
            hall_id=venue.id,
            name=venue.name,
            score=result.score,
            reason=reason,
            sample_items=list(result.sample_items),
            lat=venue.latitude,
            lon=venue.longitude,
        ))

    # 8. Persist the single top pick
    record = RecommendationRecord(
        updated_at=datetime.now(timezone.utc),
        weather=weather_out,
        meal=meal,
        pick=picks[0] if picks else None,
    )
    save_recommendation(record.model_dump(mode="json", by_alias=True))

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event(RUN_EVENT, {
        "condition": condition,
        "meal": meal,
        "desired_tags": list(desired),
        "venues": len(venues),
        "menu_failures": menu_failures,
        "picks": len(picks),
        "top_pick": picks[0].hall_id if picks else None,
        "fallback": fallback,
        "response_time_ms": elapsed_ms,
    })

    return RecommendationResponse(
        weather=weather_out,
        desired_tags=list(desired),
        meal=meal,
        picks=picks,
    )
