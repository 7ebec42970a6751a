from __future__ import annotations

from typing import Iterable

from .models import MenuItem, TaggedMenuItem

# (keywords, tags added) per field the keywords are matched against
NAME_RULES: tuple[tuple[tuple[str, ...], frozenset[str]], ...] = (
    (("soup",), frozenset({"soup"})),
    (("salad",), frozenset({"salad"})),
    (("cold brew", "iced", "smoothie"), frozenset({"drink", "cold"})),
    (("queso",), frozenset({"comfort", "hot"})),
    (("grill", "pasta", "bbq", "fried"), frozenset({"comfort"})),
)
NAME_OR_CATEGORY_RULES: tuple[tuple[tuple[str, ...], frozenset[str]], ...] = (
    (("burrito",), frozenset({"comfort", "hot"})),
    (("taco",), frozenset({"comfort"})),
    (("bowl",), frozenset({"comfort"})),
)
CATEGORY_RULES: tuple[tuple[tuple[str, ...], frozenset[str]], ...] = (
    (("beverage",), frozenset({"drink"})),
)
LABEL_RULES: tuple[tuple[tuple[str, ...], frozenset[str]], ...] = (
    (("cheese",), frozenset({"comfort", "hot"})),
)


def _matches(text: str, keywords: Iterable[str]) -> bool:
    return any(k in text for k in keywords)


def derive_tags(item: MenuItem) -> frozenset[str]:
    """Attribute tags implied by an item's name, category and labels."""
    name = item.name.lower()
    category = (item.category or "").lower()
    labels = {label.lower() for label in item.labels}

    tags: set[str] = set(item.labels)
    for keywords, added in NAME_RULES:
        if _matches(name, keywords):
            tags |= added
    for keywords, added in NAME_OR_CATEGORY_RULES:
        if _matches(name, keywords) or _matches(category, keywords):
            tags |= added
    for keywords, added in CATEGORY_RULES:
        if _matches(category, keywords):
            tags |= added
    for keywords, added in LABEL_RULES:
        if any(_matches(label, keywords) for label in labels):
            tags |= added
    return frozenset(tags)


def tag_item(item: MenuItem) -> TaggedMenuItem:
    # Tags already on a TaggedMenuItem are ignored and recomputed.
    return TaggedMenuItem(
        id=item.id,
        name=item.name,
        category=item.category,
        labels=item.labels,
        tags=derive_tags(item),
    )


def tag_menu(items: Iterable[MenuItem]) -> list[TaggedMenuItem]:
    return [tag_item(item) for item in items]


def venue_tags(menu: Iterable[TaggedMenuItem]) -> frozenset[str]:
    """Union of every item's tags."""
    tags: set[str] = set()
    for item in menu:
        tags |= item.tags
    return frozenset(tags)
