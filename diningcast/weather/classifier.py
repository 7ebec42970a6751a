from __future__ import annotations

from dataclasses import dataclass

CLEAR = "clear"
CLOUDY = "cloudy"
FOG = "fog"
RAIN = "rain"
SNOW = "snow"

# WMO weather interpretation codes
_CODE_GROUPS: dict[str, frozenset[int]] = {
    CLEAR: frozenset({0}),
    CLOUDY: frozenset({1, 2, 3}),
    FOG: frozenset({45, 48}),
    RAIN: frozenset({51, 53, 55, 56, 57, 61, 63, 65, 66, 67}),
    SNOW: frozenset({71, 73, 75, 77, 85, 86}),
}

HOT_THRESHOLD_C = 28.0
COLD_THRESHOLD_C = 10.0
FALLBACK_TAG = "balanced"


@dataclass(frozen=True)
class WeatherObservation:
    temperature_c: float | None
    precipitation_mm: float
    condition_code: int

    @property
    def condition(self) -> str:
        return classify_condition(self.condition_code)

    @property
    def temperature_f(self) -> int | None:
        if self.temperature_c is None:
            return None
        return celsius_to_fahrenheit(self.temperature_c)

    def to_dict(self) -> dict:
        return {
            "temperatureC": self.temperature_c,
            "temperatureF": self.temperature_f,
            "precipitationMm": self.precipitation_mm,
            "conditionCode": self.condition_code,
            "condition": self.condition,
        }


def celsius_to_fahrenheit(value: float) -> int:
    return round(value * 9 / 5 + 32)


def classify_condition(code: int | None) -> str:
    """Return the condition label for a WMO code, ``cloudy`` when unmapped."""
    for label, codes in _CODE_GROUPS.items():
        if code in codes:
            return label
    return CLOUDY


def weather_tags(condition: str, temperature_c: float | None) -> tuple[str, ...]:
    """
    Derive the desired food tags for the given weather.

    Rules are unioned in a fixed order so the result is deterministic and
    free of duplicates. Never empty: falls back to ``("balanced",)``.
    """
    tags: list[str] = []

    def _add(*names: str) -> None:
        for name in names:
            if name not in tags:
                tags.append(name)

    if RAIN in condition:
        _add("soup", "comfort", "hot")
    if SNOW in condition:
        _add("soup", "hot", "comfort")
    if temperature_c is not None:
        if temperature_c >= HOT_THRESHOLD_C:
            _add("cold", "salad", "drink")
        if temperature_c <= COLD_THRESHOLD_C:
            _add("soup", "hot", "comfort")

    return tuple(tags) or (FALLBACK_TAG,)
