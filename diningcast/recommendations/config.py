from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"


def _env_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RankingConfig:
    """
    Selection policy for ranked venues.

    - top_n: how many picks are returned.
    - open_only: drop closed venues before scoring.
    - fallback_to_all: when nothing scores above zero, return every venue
      ranked by score instead of an empty list.
    """

    top_n: int = max(0, int(os.getenv("RECOMMEND_TOP_N", "3")))
    open_only: bool = _env_bool("RECOMMEND_OPEN_ONLY", False)
    fallback_to_all: bool = _env_bool("RECOMMEND_FALLBACK_ALL", True)


@dataclass(frozen=True)
class StorageConfig:
    venues_path: Path = Path(os.getenv("VENUES_PATH", str(_DATA_DIR / "venues.json")))
    recommendation_path: Path = Path(
        os.getenv("RECOMMENDATION_PATH", str(_DATA_DIR / "recommendations.json"))
    )
    recommendation_key: str = "global"


DEFAULT_RANKING_CONFIG = RankingConfig()
DEFAULT_STORAGE_CONFIG = StorageConfig()
