"""
Weather layer.

Responsibilities:
- Fetch the current reading for the campus from the weather API.
- Map the coded condition to a human label.
- Derive the food attributes people are likely to want in that weather.
"""
