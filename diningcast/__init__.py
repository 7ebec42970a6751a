"""
Weather-aware dining recommendation service.

Scores campus dining venues against the current weather, meal period and
live menus, and explains the top picks.
"""
