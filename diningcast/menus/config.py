from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class MenuConfig:
    # Placeholders: {slug}, {meal}, {date} (ISO date). Empty disables external menus.
    url_template: str = os.getenv("MENU_API_URL_TEMPLATE", "")
    timeout: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))
    workers: int = int(os.getenv("MENU_WORKERS", "8"))
    cache_ttl: int = 300
    max_depth: int = 64


DEFAULT_MENU_CONFIG = MenuConfig()
