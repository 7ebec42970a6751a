from __future__ import annotations

import pytest

from diningcast.recommendations.reasons import choose_mood, compose_reason


@pytest.mark.parametrize(
    "condition, tags, rule",
    [
        ("rain", ["soup"], "weather_comfort"),
        ("snow", ["comfort", "cold"], "weather_comfort"),
        ("rain", ["drink"], "refreshing"),
        ("clear", ["cold"], "clear_refreshing"),
        ("clear", ["soup", "drink"], "clear_refreshing"),
        ("cloudy", ["comfort", "drink"], "comfort"),
        ("fog", ["drink"], "refreshing"),
        ("clear", [], "solid"),
        ("rain", ["salad"], "solid"),
    ],
)
def test_choose_mood_precedence(condition, tags, rule):
    assert choose_mood(condition, tags).name == rule


def test_compose_reason_full():
    reason = compose_reason(
        "rain",
        2.0,
        ["soup"],
        wait_text="4-8 min",
        distance_miles=0.34,
        sample_items=["Chicken Noodle Soup", "Tomato Bisque", "Chili"],
    )
    assert reason == (
        "36°F, warm comfort food for the rain, ~4-8 min wait, 0.3 mi away: "
        "try Chicken Noodle Soup, Tomato Bisque"
    )


def test_compose_reason_omits_unknown_parts():
    reason = compose_reason("cloudy", None, [])
    assert reason == "A solid option"


def test_compose_reason_fallback_phrase():
    reason = compose_reason("cloudy", 18.0, ["soup"], fallback=True)
    assert reason == "64°F, top option right now"
