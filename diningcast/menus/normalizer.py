from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Iterable, Literal

from .config import DEFAULT_MENU_CONFIG
from .models import MenuItem

logger = logging.getLogger(__name__)

MenuSource = Literal["embedded", "external"]

PLACEHOLDER_NAME = "Unnamed item"
ID_KEYS = ("id", "food_id", "item_id", "menu_item_id", "uuid")
CATEGORY_KEYS = ("category", "food_category", "station")
LABEL_KEYS = ("labels", "icons", "food_icons", "dietary_labels")
ITEM_LIST_KEYS = ("menu_items", "items")
HEADER_FLAGS = ("is_section_title", "is_station_header", "is_header")
HEADER_TYPES = {"header", "section", "section_title", "station"}


def derive_item_id(name: str, category: str | None) -> str:
    """Stable id for items that arrive without one."""
    key = f"{name.strip().lower()}|{(category or '').strip().lower()}"
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def _first_str(node: dict, keys: Iterable[str]) -> str | None:
    for key in keys:
        value = node.get(key)
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            text = str(value).strip()
            if text:
                return text
    return None


def _coerce_labels(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        values: Iterable[Any] = [value]
    elif isinstance(value, dict):
        # {"food_icons": [...]} or a flag map like {"vegan": true}
        if "food_icons" in value:
            return _coerce_labels(value["food_icons"])
        values = [k for k, v in value.items() if v]
    else:
        values = value

    labels: set[str] = set()
    for entry in values:
        if isinstance(entry, dict):
            entry = entry.get("name") or entry.get("label") or entry.get("synced_name")
        if isinstance(entry, str) and entry.strip():
            labels.add(entry.strip())
    return frozenset(labels)


def _labels_of(node: dict) -> frozenset[str]:
    for key in LABEL_KEYS:
        if key in node:
            return _coerce_labels(node[key])
    return frozenset()


def _item_from_mapping(node: dict, category: str | None = None) -> MenuItem:
    raw_name = node.get("name")
    name = str(raw_name).strip() if raw_name not in (None, "") else ""
    name = name or PLACEHOLDER_NAME
    if category is None:
        category = _first_str(node, CATEGORY_KEYS)
    item_id = _first_str(node, ID_KEYS) or derive_item_id(name, category)
    return MenuItem(id=item_id, name=name, category=category, labels=_labels_of(node))


# ── Embedded menus ───────────────────────────────────────────────────────


def _coerce_embedded(raw: Any) -> MenuItem | None:
    if isinstance(raw, MenuItem):
        return raw
    if isinstance(raw, dict):
        return _item_from_mapping(raw)
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.debug("Menu entry is not JSON, using it as the item name: %r", raw)
            parsed = None
        if isinstance(parsed, dict):
            return _item_from_mapping(parsed)
        if isinstance(parsed, str) and parsed.strip():
            raw = parsed
        return _item_from_mapping({"name": raw})
    if raw is None:
        return None
    logger.warning("Unexpected menu entry type %s, keeping it by name", type(raw).__name__)
    return _item_from_mapping({"name": str(raw)})


def normalize_embedded(raw_items: Iterable[Any] | None) -> list[MenuItem]:
    """Normalize a venue's stored menu: objects, JSON strings or plain names."""
    items: list[MenuItem] = []
    for raw in raw_items or []:
        item = _coerce_embedded(raw)
        if item is not None:
            items.append(item)
    return items


# ── External menus ───────────────────────────────────────────────────────


def _is_header(entry: dict) -> bool:
    if any(entry.get(flag) for flag in HEADER_FLAGS):
        return True
    return str(entry.get("type", "")).lower() in HEADER_TYPES


def _is_container(entry: dict) -> bool:
    """A day or station node holding its own list of entries."""
    if isinstance(entry.get("food"), dict):
        return False
    return any(
        isinstance(value, list) and any(isinstance(e, dict) for e in value)
        for key, value in entry.items()
        if key not in LABEL_KEYS
    )


def _is_item_shaped(entry: dict) -> bool:
    if _is_header(entry) or isinstance(entry.get("food"), dict):
        return True
    return bool(entry.get("name"))


def _top_level_items(payload: Any) -> list[dict] | None:
    """The flat item array, if the payload has one; lists of day or station nodes don't count."""
    candidates: list[Any] = []
    if isinstance(payload, list):
        candidates.append(payload)
    elif isinstance(payload, dict):
        candidates.extend(payload.get(key) for key in ITEM_LIST_KEYS)

    for value in candidates:
        if not isinstance(value, list) or not all(isinstance(e, dict) for e in value):
            continue
        if any(_is_item_shaped(e) for e in value) and not any(_is_container(e) for e in value):
            return value
    return None


def _walk_sections(entries: list[dict]) -> list[MenuItem]:
    items: list[MenuItem] = []
    current: str | None = None
    for entry in entries:
        if _is_header(entry):
            current = _first_str(entry, ("text", "name", "title"))
            continue
        food = entry.get("food")
        node = {**entry, **food} if isinstance(food, dict) else entry
        if not node.get("name"):
            continue
        items.append(_item_from_mapping(node, category=current))
    return items


def _is_candidate(node: dict) -> bool:
    name = node.get("name")
    return isinstance(name, str) and bool(name.strip()) and _first_str(node, ID_KEYS) is not None


def _search_tree(payload: Any, max_depth: int) -> list[MenuItem]:
    items: list[MenuItem] = []
    seen_keys: set[tuple[str, str]] = set()
    visited: set[int] = set()
    stack: list[tuple[Any, int]] = [(payload, 0)]

    while stack:
        node, depth = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))
        if depth > max_depth:
            logger.debug("Menu payload deeper than %d levels, pruning", max_depth)
            continue

        if isinstance(node, dict):
            if _is_candidate(node):
                item = _item_from_mapping(node)
                key = (item.id, item.name)
                if key not in seen_keys:
                    seen_keys.add(key)
                    items.append(item)
            children = [v for k, v in node.items() if k not in LABEL_KEYS]
        else:
            children = node

        # Reversed so the stack pops children in document order
        for child in reversed(children):
            if isinstance(child, (dict, list)):
                stack.append((child, depth + 1))

    return items


def normalize_external(payload: Any, max_depth: int = DEFAULT_MENU_CONFIG.max_depth) -> list[MenuItem]:
    """
    Normalize a menu API payload.

    A flat item array with section headers is walked in order, each food
    inheriting the most recent header as its category. Any other shape is
    searched as a tree for named objects carrying an id, deduplicated by
    (id, name) in first-seen order. The tree search also runs when the flat
    walk finds no items.
    """
    entries = _top_level_items(payload)
    if entries is not None:
        items = _walk_sections(entries)
        if items:
            return items
    return _search_tree(payload, max_depth)


def normalize_menu(source: MenuSource, raw: Any) -> list[MenuItem]:
    if source == "external":
        return normalize_external(raw)
    return normalize_embedded(raw)
