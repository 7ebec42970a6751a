from __future__ import annotations

import re
from typing import Sequence

from ..menus.models import TaggedMenuItem
from ..menus.tagger import venue_tags
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import ScoreResult, Venue

TAG_MATCH_POINTS = 2.0
OPEN_POINTS = 1.0
SHORT_WAIT_POINTS = 1.0
MEDIUM_WAIT_POINTS = 0.5
SHORT_WAIT_MAX = 5
MEDIUM_WAIT_MAX = 10
MAX_SAMPLE_ITEMS = 3

_NUMBER_RE = re.compile(r"\d+")


def parse_wait_minutes(text: str | None) -> int | None:
    """First integer in a free-text wait estimate ("4-8 min" -> 4)."""
    if not text:
        return None
    match = _NUMBER_RE.search(str(text))
    return int(match.group()) if match else None


def wait_bonus(text: str | None) -> float:
    minutes = parse_wait_minutes(text)
    if minutes is None:
        return 0.0
    if minutes <= SHORT_WAIT_MAX:
        return SHORT_WAIT_POINTS
    if minutes <= MEDIUM_WAIT_MAX:
        return MEDIUM_WAIT_POINTS
    return 0.0


def _sample_items(menu: Sequence[TaggedMenuItem], desired: set[str]) -> tuple[str, ...]:
    names: list[str] = []
    for item in menu:
        if item.tags & desired and item.name not in names:
            names.append(item.name)
            if len(names) == MAX_SAMPLE_ITEMS:
                break
    return tuple(names)


def score_venue(
    venue: Venue,
    menu: Sequence[TaggedMenuItem],
    desired_tags: Sequence[str],
) -> ScoreResult:
    """
    Score one venue. Pure: depends only on this venue and its own menu.

    score = 2 per desired tag found anywhere on the menu
          + 1 if open
          + wait bonus (<=5 min: 1, 6-10 min: 0.5)
    """
    available = venue_tags(menu)
    matched = tuple(tag for tag in desired_tags if tag in available)

    score = TAG_MATCH_POINTS * len(matched)
    if venue.is_open:
        score += OPEN_POINTS
    score += wait_bonus(venue.wait_minutes_text)

    return ScoreResult(
        venue_id=venue.id,
        score=score,
        matched_tags=matched,
        sample_items=_sample_items(menu, set(desired_tags)),
    )


def rank_results(results: Sequence[ScoreResult]) -> list[ScoreResult]:
    """Highest score first; ties keep their input order."""
    return sorted(results, key=lambda r: r.score, reverse=True)


def select_picks(
    results: Sequence[ScoreResult],
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> tuple[list[ScoreResult], bool]:
    """
    Apply the selection policy.

    Returns the top ``config.top_n`` results scoring above zero and whether
    the fallback (every venue ranked, zero scores included) was used.
    """
    ranked = rank_results([r for r in results if r.score > 0])
    fallback = False
    if not ranked and config.fallback_to_all:
        ranked = rank_results(results)
        fallback = bool(ranked)
    return ranked[: max(0, config.top_n)], fallback
