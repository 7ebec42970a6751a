from __future__ import annotations

from collections import Counter
from typing import Any

from .store import RUN_EVENT


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    runs = [e for e in events if e["type"] == RUN_EVENT]
    total = len(runs)

    times = [r["response_time_ms"] for r in runs if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Most frequent top picks
    pick_counter: Counter[str] = Counter()
    for r in runs:
        if r.get("top_pick"):
            pick_counter[r["top_pick"]] += 1
    top_picks = [{"hall_id": n, "count": c} for n, c in pick_counter.most_common(10)]

    condition_counts = dict(Counter(r.get("condition", "unknown") for r in runs))
    meal_counts = dict(Counter(r.get("meal", "unknown") for r in runs))

    fallbacks = sum(1 for r in runs if r.get("fallback"))
    failed_menus = sum(r.get("menu_failures", 0) for r in runs)

    return {
        "total_runs": total,
        "avg_response_time_ms": avg_time,
        "top_picks": top_picks,
        "conditions": condition_counts,
        "meals": meal_counts,
        "fallback_rate": round(fallbacks / total * 100, 1) if total else 0.0,
        "menu_failures": failed_menus,
    }
