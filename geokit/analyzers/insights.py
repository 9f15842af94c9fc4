"""Turns category scores into a ranked list of actionable insights."""

from __future__ import annotations

from typing import List, Optional

from geokit.scanner.models import (
    Category,
    CategoryScores,
    ExtractionResult,
    Insight,
    InsightImpact,
)

MAX_INSIGHTS = 10
THIN_CONTENT_WORDS = 500

HIGH_IMPACT_FACTORS = frozenset(
    {"Schema Markup", "Topic Definition", "Author Info", "Heading Structure"}
)
MEDIUM_IMPACT_FACTORS = frozenset(
    {"Lists", "Questions Addressed", "Citations & Sources", "Meta Description"}
)

FACTOR_ACTIONS: dict[str, str] = {
    "Schema Markup": "Add JSON-LD structured data",
    "Heading Structure": "Reorganize headings hierarchy",
    "Author Info": "Add author byline with credentials",
    "Topic Definition": "Add clear definition in first paragraph",
    "Lists": "Convert key points to bullet lists",
    "Questions Addressed": "Add FAQ section",
    "Meta Description": "Write compelling meta description",
    "Citations & Sources": "Add external reference links",
    "Date Information": "Add publication and update dates",
    "Content Length": "Expand content with more detail",
    "Images": "Add descriptive alt text",
    "Trust Signals": "Add contact and about pages",
    "Expertise Signals": "Highlight credentials and experience",
    "Facts & Statistics": "Include specific data and numbers",
    "Named Entities": "Reference specific tools and concepts",
    "Comparisons": "Add comparison sections",
    "Reading Complexity": "Simplify complex sentences",
    "Active Voice": "Rewrite passive sentences",
}

CATEGORY_LABELS: dict[Category, str] = {
    "readability": "Readability",
    "structure": "Structure",
    "entities": "Entity Clarity",
    "sources": "Source Credibility",
}

_TYPE_ORDER = {"improvement": 0, "warning": 1, "success": 2}
_IMPACT_ORDER = {"high": 0, "medium": 1, "low": 2}


def determine_impact(factor_name: str, category_percentage: int) -> InsightImpact:
    if factor_name in HIGH_IMPACT_FACTORS and category_percentage < 60:
        return "high"
    if factor_name in MEDIUM_IMPACT_FACTORS:
        return "medium"
    return "low"


def action_for_factor(factor_name: str) -> Optional[str]:
    return FACTOR_ACTIONS.get(factor_name)


def _category_insights(scores: CategoryScores) -> List[Insight]:
    insights: List[Insight] = []

    for category, detail in scores.items():
        label = CATEGORY_LABELS[category]

        for factor in detail.factors:
            if factor.impact == "negative" and factor.suggestion:
                insights.append(
                    Insight(
                        type="improvement",
                        category=category,
                        title=f"Improve {factor.name}",
                        description=factor.suggestion,
                        impact=determine_impact(factor.name, detail.percentage),
                        action=action_for_factor(factor.name),
                    )
                )

        if detail.percentage >= 80:
            positive = [f for f in detail.factors if f.impact == "positive"]
            if positive:
                insights.append(
                    Insight(
                        type="success",
                        category=category,
                        title=f"Strong {label}",
                        description=(
                            f"Your {label.lower()} is excellent. "
                            f"{positive[0].name} is particularly strong."
                        ),
                        impact="low",
                    )
                )

        if 40 <= detail.percentage < 60:
            insights.append(
                Insight(
                    type="warning",
                    category=category,
                    title=f"{label} needs attention",
                    description=(
                        f"Your {label.lower()} score is borderline. "
                        "Small improvements can have big impact."
                    ),
                    impact="medium",
                )
            )

    return insights


def _content_specific_insights(extraction: ExtractionResult) -> List[Insight]:
    """High-impact overrides, in the order they are pushed to the front."""
    overrides: List[Insight] = []

    if not extraction.metadata.has_schema:
        overrides.append(
            Insight(
                type="improvement",
                category="structure",
                title="Add Schema Markup",
                description=(
                    "Schema.org structured data is critical for AI search engines. "
                    "Add FAQ, Article, or HowTo schema."
                ),
                impact="high",
                action="Implement JSON-LD structured data",
            )
        )

    word_count = extraction.content.word_count
    if word_count < THIN_CONTENT_WORDS:
        overrides.append(
            Insight(
                type="improvement",
                category="readability",
                title="Expand Content",
                description=(
                    f"At {word_count} words, your content may be too thin. "
                    "AI engines prefer comprehensive coverage of topics."
                ),
                impact="high",
                action="Add more detailed information (target 1500+ words)",
            )
        )

    if not extraction.metadata.author:
        overrides.append(
            Insight(
                type="improvement",
                category="sources",
                title="Add Author Attribution",
                description=(
                    "Author information is a key E-E-A-T signal. "
                    "AI engines trust content with clear authorship."
                ),
                impact="high",
                action="Add author name, bio, and credentials",
            )
        )

    return overrides


def _rank(insight: Insight) -> tuple[int, int]:
    return _TYPE_ORDER[insight.type], _IMPACT_ORDER[insight.impact]


def generate_insights(scores: CategoryScores, extraction: ExtractionResult) -> List[Insight]:
    """Derive the ranked insight list for one scan.

    Content-specific overrides are always prepended, each one pushed to the
    front, even when a category insight covers the same factor ("Add Schema
    Markup" next to "Improve Schema Markup").  The list is then stably sorted
    by type and impact and only afterwards truncated to :data:`MAX_INSIGHTS`.
    """
    insights = _category_insights(scores)

    for override in _content_specific_insights(extraction):
        insights.insert(0, override)

    insights.sort(key=_rank)
    return insights[:MAX_INSIGHTS]
