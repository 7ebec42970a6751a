from __future__ import annotations

import logging

import httpx

from .classifier import WeatherObservation
from .config import DEFAULT_WEATHER_CONFIG, WeatherConfig

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "temperature_2m,precipitation,weather_code"


class WeatherUnavailableError(RuntimeError):
    """Raised when the current weather cannot be fetched or understood."""


def parse_current(payload: dict) -> WeatherObservation:
    """Build an observation from the ``current`` block of a forecast response."""
    current = payload.get("current") if isinstance(payload, dict) else None
    if not isinstance(current, dict):
        raise WeatherUnavailableError("weather response has no 'current' block")

    code = current.get("weather_code")
    if code is None:
        raise WeatherUnavailableError("weather response has no weather_code")

    temperature = current.get("temperature_2m")
    try:
        return WeatherObservation(
            temperature_c=float(temperature) if temperature is not None else None,
            precipitation_mm=float(current.get("precipitation") or 0.0),
            condition_code=int(code),
        )
    except (TypeError, ValueError) as exc:
        raise WeatherUnavailableError(f"malformed weather reading: {exc}") from exc


def fetch_weather(config: WeatherConfig = DEFAULT_WEATHER_CONFIG) -> WeatherObservation:
    """
    Fetch the current weather at the configured campus coordinates.

    Raises WeatherUnavailableError on transport failure, non-2xx status or
    an unexpected body. There is no fallback: desired tags depend on it.
    """
    try:
        resp = httpx.get(
            config.api_url,
            params={
                "latitude": config.latitude,
                "longitude": config.longitude,
                "current": CURRENT_FIELDS,
                "timezone": config.timezone,
            },
            timeout=config.timeout,
        )
        resp.raise_for_status()
        payload = resp.json()
    except httpx.HTTPError as exc:
        raise WeatherUnavailableError(f"weather fetch failed: {exc}") from exc
    except ValueError as exc:
        raise WeatherUnavailableError("weather response was not JSON") from exc

    observation = parse_current(payload)
    logger.info(
        "Weather at (%s, %s): code=%s temp=%sC",
        config.latitude,
        config.longitude,
        observation.condition_code,
        observation.temperature_c,
    )
    return observation
