from __future__ import annotations

from typing import Callable, Iterable, NamedTuple, Sequence

from ..weather.classifier import CLEAR, RAIN, SNOW, celsius_to_fahrenheit

WET_CONDITIONS = (RAIN, SNOW)
COMFORT_TAGS = frozenset({"soup", "comfort"})
REFRESHING_TAGS = frozenset({"cold", "drink"})
FALLBACK_PHRASE = "top option right now"
SAMPLE_ITEMS_SHOWN = 2


class MoodRule(NamedTuple):
    name: str
    applies: Callable[[str, frozenset[str]], bool]
    phrase: str


def _is_wet(condition: str) -> bool:
    return any(wet in condition for wet in WET_CONDITIONS)


# First matching rule wins.
MOOD_RULES: tuple[MoodRule, ...] = (
    MoodRule(
        "weather_comfort",
        lambda condition, tags: _is_wet(condition) and bool(tags & COMFORT_TAGS),
        "warm comfort food for the {condition}",
    ),
    MoodRule(
        "clear_refreshing",
        lambda condition, tags: condition == CLEAR and bool(tags & REFRESHING_TAGS),
        "something refreshing for a clear day",
    ),
    MoodRule("comfort", lambda condition, tags: bool(tags & COMFORT_TAGS), "hearty comfort food"),
    MoodRule("refreshing", lambda condition, tags: bool(tags & REFRESHING_TAGS), "cool and refreshing"),
    MoodRule("solid", lambda condition, tags: True, "a solid option"),
)


def choose_mood(condition: str, matched_tags: Iterable[str]) -> MoodRule:
    tags = frozenset(matched_tags)
    for rule in MOOD_RULES:
        if rule.applies(condition, tags):
            return rule
    return MOOD_RULES[-1]


def compose_reason(
    condition: str,
    temperature_c: float | None,
    matched_tags: Iterable[str],
    wait_text: str | None = None,
    distance_miles: float | None = None,
    sample_items: Sequence[str] = (),
    fallback: bool = False,
) -> str:
    """
    Build the one-line justification shown with a pick.

    Clauses, comma-joined in order: temperature, mood, wait, distance.
    Sample items follow after a colon, e.g.
    ``"36°F, warm comfort food for the rain, ~4-8 min wait: try Chicken Noodle Soup"``.
    """
    parts: list[str] = []
    if temperature_c is not None:
        parts.append(f"{celsius_to_fahrenheit(temperature_c)}°F")

    if fallback:
        parts.append(FALLBACK_PHRASE)
    else:
        parts.append(choose_mood(condition, matched_tags).phrase.format(condition=condition))

    if wait_text:
        parts.append(f"~{wait_text} wait")
    if distance_miles is not None:
        parts.append(f"{distance_miles:.1f} mi away")

    reason = ", ".join(parts)
    if sample_items:
        reason += ": try " + ", ".join(sample_items[:SAMPLE_ITEMS_SHOWN])
    return reason[:1].upper() + reason[1:]
