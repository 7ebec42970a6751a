from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from ..weather.config import DEFAULT_WEATHER_CONFIG

BREAKFAST = "breakfast"
LUNCH = "lunch"
DINNER = "dinner"
OFF_HOURS = "off-hours"

# (start hour inclusive, end hour exclusive, label)
MEAL_WINDOWS: tuple[tuple[int, int, str], ...] = (
    (5, 10, BREAKFAST),
    (10, 16, LUNCH),
    (16, 22, DINNER),
)


def local_now(tz_name: str = DEFAULT_WEATHER_CONFIG.timezone) -> datetime:
    """Current wall-clock time in the campus time zone."""
    return datetime.now(ZoneInfo(tz_name))


def meal_period(moment: datetime) -> str:
    """Return the meal period for a local time; boundary hours start the later period."""
    hour = moment.hour
    for start, end, label in MEAL_WINDOWS:
        if start <= hour < end:
            return label
    return OFF_HOURS
