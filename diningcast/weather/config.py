from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class WeatherConfig:
    api_url: str = os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast")
    latitude: float = float(os.getenv("CAMPUS_LAT", "30.2849"))
    longitude: float = float(os.getenv("CAMPUS_LON", "-97.7341"))
    timezone: str = os.getenv("CAMPUS_TIMEZONE", "America/Chicago")
    timeout: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))


DEFAULT_WEATHER_CONFIG = WeatherConfig()
