from __future__ import annotations

from collections import Counter
from typing import Any

from ..catalog.models import DataQualityReport
from .config import DEFAULT_ANALYTICS_CONFIG, AnalyticsConfig


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), 1) if values else 0.0


def compute_analytics(
    events: list[dict[str, Any]],
    data_quality: DataQualityReport | None = None,
    config: AnalyticsConfig = DEFAULT_ANALYTICS_CONFIG,
) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "match"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = _mean(times)

    # Average stated budget and commute ceiling
    budgets = [s["budget"] for s in searches if s.get("budget") is not None]
    commutes = [s["max_commute"] for s in searches if s.get("max_commute") is not None]

    # Top lifestyle tags and priorities
    lifestyle_counter: Counter[str] = Counter()
    priority_counter: Counter[str] = Counter()
    for s in searches:
        for tag in s.get("lifestyle", []) or []:
            lifestyle_counter[tag] += 1
        for p in s.get("priorities", []) or []:
            priority_counter[p] += 1
    top_lifestyles = [{"name": n, "count": c} for n, c in lifestyle_counter.most_common(10)]
    top_priorities = [{"name": n, "count": c} for n, c in priority_counter.most_common(10)]
    popular = (lifestyle_counter + priority_counter).most_common(10)

    # Results-per-search distribution
    distribution: Counter[str] = Counter()
    for s in searches:
        distribution[str(s.get("results_returned", 0))] += 1

    # Filter usage rates
    filter_counts = {"budget": 0, "commute": 0, "lifestyle": 0, "priorities": 0}
    for s in searches:
        if s.get("budget") is not None:
            filter_counts["budget"] += 1
        if s.get("max_commute") is not None:
            filter_counts["commute"] += 1
        if s.get("lifestyle"):
            filter_counts["lifestyle"] += 1
        if s.get("priorities"):
            filter_counts["priorities"] += 1
    filter_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in filter_counts.items()
    }

    # Accuracy score leans on the catalog's data quality
    if data_quality is not None:
        accuracy_score = round((data_quality.completeness + data_quality.accuracy) / 2)
    else:
        accuracy_score = 0

    return {
        "user_behavior": {
            "total_searches": total,
            "average_budget": round(sum(budgets) / len(budgets)) if budgets else None,
            "average_max_commute": round(sum(commutes) / len(commutes)) if commutes else None,
            "top_lifestyles": top_lifestyles,
            "top_priorities": top_priorities,
            "most_popular_features": [name for name, _ in popular],
        },
        "algorithm_performance": {
            "average_response_time_ms": avg_time,
            "match_distribution": dict(distribution),
            "accuracy_score": accuracy_score,
            "algorithm_version": config.algorithm_version,
        },
        "filter_usage": filter_usage,
        "data_quality": data_quality.model_dump(mode="json") if data_quality else None,
    }
