from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


class Venue(BaseModel):
    model_config = _CAMEL

    id: str = Field(..., min_length=1)
    name: str
    is_open: bool = False
    wait_minutes_text: str | None = None
    menu_source: Literal["embedded", "external"] = "embedded"
    menu_slug: str | None = None
    raw_menu_items: list[Any] | None = None
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Venue:
        """Build a venue from a stored document, accepting the field spellings seen in storage."""
        open_flag = _first_present(data, "isOpen", "open")
        if open_flag is None:
            is_open = str(data.get("status", "")).strip().lower() == "open"
        else:
            is_open = open_flag is True

        wait = _first_present(data, "waitMinutesText", "wait", "waitTime")
        slug = _first_present(data, "menuSlug", "slug")
        raw_menu = _first_present(data, "rawMenuItems", "menu")
        source = data.get("menuSource")
        if source not in ("embedded", "external"):
            source = "external" if slug and raw_menu is None else "embedded"

        return cls(
            id=str(doc_id),
            name=str(data.get("name") or doc_id),
            is_open=is_open,
            wait_minutes_text=str(wait) if wait is not None else None,
            menu_source=source,
            menu_slug=slug,
            raw_menu_items=list(raw_menu) if isinstance(raw_menu, (list, tuple)) else None,
            latitude=_first_present(data, "latitude", "lat"),
            longitude=_first_present(data, "longitude", "lon", "lng"),
        )


@dataclass(frozen=True)
class ScoreResult:
    venue_id: str
    score: float
    matched_tags: tuple[str, ...] = ()
    sample_items: tuple[str, ...] = ()


class WeatherOut(BaseModel):
    model_config = _CAMEL

    temperature_c: float | None
    temperature_f: int | None
    precipitation_mm: float
    condition_code: int
    condition: str


class Pick(BaseModel):
    model_config = _CAMEL

    hall_id: str
    name: str
    score: float
    reason: str
    sample_items: list[str] = Field(default_factory=list)
    lat: float | None = None
    lon: float | None = None


class RecommendationResponse(BaseModel):
    model_config = _CAMEL

    weather: WeatherOut
    desired_tags: list[str]
    meal: str
    picks: list[Pick]


class RecommendationRecord(BaseModel):
    """The single persisted recommendation document, overwritten on every run."""

    model_config = _CAMEL

    updated_at: datetime
    weather: WeatherOut
    meal: str
    pick: Pick | None = None
