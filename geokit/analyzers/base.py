"""Helpers shared by the four category analyzers."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from geokit.scanner.models import MAX_SCORE, ScoreDetail, ScoreFactor, score_label


def count_matches(patterns: Iterable[re.Pattern[str]], text: str) -> int:
    """Total number of non-overlapping matches of every pattern in *text*."""
    return sum(len(pattern.findall(text)) for pattern in patterns)


def compile_all(patterns: Sequence[str], flags: int = re.IGNORECASE) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, flags) for p in patterns)


def build_detail(score: int, factors: Sequence[ScoreFactor], description: str) -> ScoreDetail:
    """Wrap a summed *score* and its *factors* into a :class:`ScoreDetail`."""
    percentage = round(score / MAX_SCORE * 100)
    return ScoreDetail(
        score=score,
        max_score=MAX_SCORE,
        percentage=percentage,
        label=score_label(percentage),
        description=description,
        factors=tuple(factors),
    )
