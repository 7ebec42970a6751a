from __future__ import annotations

import json

from diningcast.menus.models import MenuItem
from diningcast.menus.normalizer import (
    PLACEHOLDER_NAME,
    derive_item_id,
    normalize_embedded,
    normalize_external,
    normalize_menu,
)

# ── Embedded menus ───────────────────────────────────────────────────────


def test_embedded_objects_keep_fields_and_order():
    items = normalize_embedded([
        {"id": "a1", "name": "Tomato Soup", "category": "Soups", "labels": ["Vegetarian"]},
        {"id": "a2", "name": "Caesar Salad"},
    ])
    assert [i.id for i in items] == ["a1", "a2"]
    assert items[0].category == "Soups"
    assert items[0].labels == frozenset({"Vegetarian"})
    assert items[1].category is None


def test_embedded_json_strings_are_parsed():
    raw = json.dumps({"id": 7, "name": "Iced Latte", "category": "Beverages"})
    [item] = normalize_embedded([raw])
    assert item == MenuItem(id="7", name="Iced Latte", category="Beverages")


def test_embedded_unparsable_string_becomes_name():
    [item] = normalize_embedded(["Chicken Noodle Soup"])
    assert item.name == "Chicken Noodle Soup"
    assert item.category is None
    assert item.labels == frozenset()


def test_embedded_missing_name_gets_placeholder():
    [item] = normalize_embedded([{"id": "x"}])
    assert item.name == PLACEHOLDER_NAME


def test_embedded_missing_id_is_deterministic():
    first = normalize_embedded([{"name": "Queso Dip", "category": "Sides"}])
    second = normalize_embedded([{"name": "Queso Dip", "category": "Sides"}])
    assert first[0].id == second[0].id == derive_item_id("Queso Dip", "Sides")


def test_embedded_none_and_missing_menu():
    assert normalize_embedded(None) == []
    assert normalize_embedded([None]) == []


def test_normalizing_normalized_items_is_a_no_op():
    items = normalize_embedded([
        {"name": "Pasta Bake", "category": "Entrees", "labels": ["Contains Cheese"]},
        "plain string item",
    ])
    assert normalize_embedded(items) == items
    assert normalize_embedded([i.to_dict() for i in items]) == items


# ── External menus ───────────────────────────────────────────────────────


def test_external_flat_array_inherits_section_headers():
    payload = {
        "menu_items": [
            {"is_section_title": True, "text": "Soup Station"},
            {"food": {"id": 11, "name": "Chicken Noodle Soup", "icons": {"food_icons": [{"name": "Halal"}]}}},
            {"food": {"id": 12, "name": "Tomato Bisque"}},
            {"is_section_title": True, "text": "Beverages"},
            {"food": {"id": 13, "name": "Lemonade"}},
            {"text": "", "food": None},
        ]
    }
    items = normalize_external(payload)
    assert [(i.id, i.name, i.category) for i in items] == [
        ("11", "Chicken Noodle Soup", "Soup Station"),
        ("12", "Tomato Bisque", "Soup Station"),
        ("13", "Lemonade", "Beverages"),
    ]
    assert items[0].labels == frozenset({"Halal"})


def test_external_top_level_list_with_type_headers():
    payload = [
        {"type": "header", "name": "Grill"},
        {"id": "g1", "name": "Cheeseburger"},
    ]
    [item] = normalize_external(payload)
    assert item.category == "Grill"


def test_external_nested_payload_falls_back_to_tree_search():
    payload = {
        "days": [
            {
                "date": "2026-10-19",
                "stations": [
                    {"title": "Soups", "foods": [
                        {"id": 1, "name": "Chili", "food_category": "entree"},
                        {"id": 2, "name": "Minestrone"},
                    ]},
                ],
            },
            {
                "date": "2026-10-20",
                "stations": [{"foods": [{"id": 1, "name": "Chili"}, {"id": 3, "name": "Pho"}]}],
            },
        ]
    }
    items = normalize_external(payload)
    assert [(i.id, i.name) for i in items] == [("1", "Chili"), ("2", "Minestrone"), ("3", "Pho")]
    assert items[0].category == "entree"


def test_external_list_of_day_nodes_is_searched_as_a_tree():
    payload = [{"date": "2026-10-19", "menu_items": [{"id": 1, "name": "Tomato Soup"}]}]
    items = normalize_external(payload)
    assert [(i.id, i.name) for i in items] == [("1", "Tomato Soup")]


def test_external_items_key_holding_stations_is_searched_as_a_tree():
    payload = {"items": [{"station": "Grill", "foods": [{"id": 2, "name": "Fried Rice"}]}]}
    items = normalize_external(payload)
    assert [(i.id, i.name) for i in items] == [("2", "Fried Rice")]


def test_external_flat_walk_without_items_falls_back_to_tree_search():
    payload = [
        {"is_section_title": True, "text": "Specials"},
        {"slot": {"dish": {"id": 4, "name": "Pho"}}},
    ]
    assert [i.name for i in normalize_external(payload)] == ["Pho"]


def test_external_tree_search_survives_cycles():
    node: dict = {"id": 5, "name": "Ramen Bowl"}
    root: dict = {"data": {"entries": [node]}}
    node["parent"] = root
    items = normalize_external(root)
    assert [i.name for i in items] == ["Ramen Bowl"]


def test_external_tree_search_respects_depth_limit():
    deep: dict = {"id": 1, "name": "Too Deep"}
    for _ in range(10):
        deep = {"child": deep}
    assert normalize_external(deep, max_depth=5) == []
    assert [i.name for i in normalize_external(deep, max_depth=20)] == ["Too Deep"]


def test_external_ignores_label_objects_inside_items():
    payload = {"data": {"food": {"id": 9, "name": "Tofu Stir Fry", "icons": [{"id": 100, "name": "Vegan"}]}}}
    items = normalize_external(payload)
    assert [i.name for i in items] == ["Tofu Stir Fry"]
    assert items[0].labels == frozenset({"Vegan"})


def test_normalize_menu_dispatches_on_source():
    assert normalize_menu("embedded", ["Salad"])[0].name == "Salad"
    assert normalize_menu("external", [{"id": 1, "name": "Salad"}])[0].id == "1"
