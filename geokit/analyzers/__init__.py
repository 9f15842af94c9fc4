"""Heuristic analyzers that score an :class:`ExtractionResult`.

Each analyzer is a pure function ``ExtractionResult -> ScoreDetail`` that
never raises and never mutates the shared parsed document.
"""

from geokit.analyzers.aggregator import CATEGORY_WEIGHTS, compute_overall_score
from geokit.analyzers.entities import analyze_entities
from geokit.analyzers.insights import generate_insights
from geokit.analyzers.readability import analyze_readability
from geokit.analyzers.sources import analyze_sources
from geokit.analyzers.structure import analyze_structure

ANALYZERS = {
    "readability": analyze_readability,
    "structure": analyze_structure,
    "entities": analyze_entities,
    "sources": analyze_sources,
}

__all__ = [
    "ANALYZERS",
    "CATEGORY_WEIGHTS",
    "analyze_readability",
    "analyze_structure",
    "analyze_entities",
    "analyze_sources",
    "compute_overall_score",
    "generate_insights",
]
