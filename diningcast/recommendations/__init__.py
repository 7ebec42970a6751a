"""
Weather-aware dining recommendation engine.

Responsibilities:
- Load venues and resolve each venue's menu (embedded or fetched).
- Score venues against the food attributes the weather calls for.
- Rank, select and explain the top picks.
- Persist the single top pick with its weather and meal context.
"""
