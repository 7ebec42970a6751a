"""
Menu layer.

Responsibilities:
- Fetch a venue's daily menu from the menu API (cached per slug/meal/date).
- Normalize embedded or external menu payloads into one item shape.
- Tag each item with the food attributes it satisfies.
"""
