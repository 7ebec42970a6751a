from __future__ import annotations

import json
import logging
import os
from typing import Any

from .config import DEFAULT_STORAGE_CONFIG, StorageConfig
from .models import Venue

logger = logging.getLogger(__name__)


def _read_json(path) -> Any:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def _venue_documents(raw: Any) -> list[tuple[str, dict[str, Any]]]:
    # Either {"halls": {id: doc}} / {id: doc} or a list of docs carrying "id"
    if isinstance(raw, dict) and isinstance(raw.get("halls"), (dict, list)):
        raw = raw["halls"]
    if isinstance(raw, dict):
        return [(str(doc_id), doc) for doc_id, doc in raw.items() if isinstance(doc, dict)]
    docs: list[tuple[str, dict[str, Any]]] = []
    for doc in raw or []:
        if isinstance(doc, dict) and doc.get("id") is not None:
            docs.append((str(doc["id"]), doc))
        else:
            logger.warning("Skipping venue document without an id: %r", doc)
    return docs


def get_venues(config: StorageConfig = DEFAULT_STORAGE_CONFIG) -> list[Venue]:
    """Read the full venue collection; not cached between calls."""
    raw = _read_json(config.venues_path)
    return [Venue.from_document(doc_id, doc) for doc_id, doc in _venue_documents(raw)]


def save_recommendation(
    record: dict[str, Any],
    config: StorageConfig = DEFAULT_STORAGE_CONFIG,
) -> None:
    """Overwrite the recommendation document under its fixed key. Last writer wins."""
    path = config.recommendation_path
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as fh:
        json.dump({config.recommendation_key: record}, fh, indent=2, default=str)
    os.replace(tmp_path, path)
    logger.info("Saved recommendation to %s", path)


def get_latest_recommendation(
    config: StorageConfig = DEFAULT_STORAGE_CONFIG,
) -> dict[str, Any] | None:
    if not config.recommendation_path.exists():
        return None
    return _read_json(config.recommendation_path).get(config.recommendation_key)
