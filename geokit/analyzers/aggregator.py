"""Weighted combination of the four category scores."""

from __future__ import annotations

import math

from geokit.scanner.models import Category, CategoryScores

CATEGORY_WEIGHTS: dict[Category, float] = {
    "readability": 0.30,
    "structure": 0.25,
    "entities": 0.25,
    "sources": 0.20,
}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_overall_score(scores: CategoryScores) -> int:
    """Weighted sum of the category percentages, rounded half up."""
    total = sum(
        detail.percentage * CATEGORY_WEIGHTS[category]
        for category, detail in scores.items()
    )
    return round_half_up(total)
