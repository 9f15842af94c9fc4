"""Structure: how well-organised the page is for machine parsing."""

from __future__ import annotations

from typing import Optional

from geokit.analyzers.base import build_detail
from geokit.scanner.extractor import extract_headings, extract_images, extract_lists
from geokit.scanner.models import (
    ExtractionResult,
    Heading,
    ImageStats,
    ListStats,
    PageMetadata,
    ScoreDetail,
    ScoreFactor,
)

DESCRIPTION = "How well-organized your content is for AI parsing"


def _headings(headings: list[Heading]) -> tuple[int, ScoreFactor]:
    h1 = sum(1 for h in headings if h.level == 1)
    h2 = sum(1 for h in headings if h.level == 2)
    h3 = sum(1 for h in headings if h.level == 3)

    if h1 == 1 and h2 >= 2:
        return 25, ScoreFactor(
            "Heading Structure", f"1 H1, {h2} H2s, {h3} H3s", "positive"
        )
    if h1 == 1 and h2 >= 1:
        return 18, ScoreFactor(
            "Heading Structure",
            f"1 H1, {h2} H2s",
            "neutral",
            "Add more H2 subheadings to organize content",
        )
    if h1 == 0:
        return 5, ScoreFactor(
            "Heading Structure",
            "Missing H1",
            "negative",
            "Add a clear H1 heading to define the page topic",
        )
    if h1 > 1:
        return 10, ScoreFactor(
            "Heading Structure",
            f"{h1} H1s (should be 1)",
            "negative",
            "Use only one H1 per page",
        )
    return 12, ScoreFactor(
        "Heading Structure",
        f"{h1} H1, {h2} H2s",
        "neutral",
        "Add subheadings to improve content hierarchy",
    )


def _lists(lists: ListStats) -> tuple[int, ScoreFactor]:
    summary = f"{lists.ordered + lists.unordered} lists, {lists.total_items} items"
    if lists.total_items >= 10:
        return 20, ScoreFactor("Lists", summary, "positive")
    if lists.total_items >= 3:
        return 15, ScoreFactor(
            "Lists",
            summary,
            "neutral",
            "AI engines love structured lists. Consider adding more.",
        )
    if lists.total_items > 0:
        return 8, ScoreFactor(
            "Lists",
            f"{lists.total_items} items",
            "neutral",
            "Add bullet points or numbered lists for key information",
        )
    return 0, ScoreFactor(
        "Lists",
        "None",
        "negative",
        "Add lists to highlight key points - AI engines extract these easily",
    )


def _schema(metadata: PageMetadata) -> tuple[int, ScoreFactor]:
    types = ", ".join(metadata.schema_types)
    if metadata.has_schema and len(metadata.schema_types) >= 2:
        return 25, ScoreFactor("Schema Markup", types, "positive")
    if metadata.has_schema:
        return 18, ScoreFactor(
            "Schema Markup",
            types or "Present",
            "neutral",
            "Add more schema types (FAQ, HowTo, Article) for richer AI understanding",
        )
    return 0, ScoreFactor(
        "Schema Markup",
        "None",
        "negative",
        "Add JSON-LD schema markup - critical for AI visibility",
    )


def _images(images: ImageStats) -> tuple[int, ScoreFactor]:
    if images.total == 0:
        return 8, ScoreFactor(
            "Images",
            "No images",
            "neutral",
            "Consider adding relevant images with descriptive alt text",
        )
    if images.without_alt == 0 and images.total >= 2:
        return 15, ScoreFactor(
            "Images", f"{images.total} images, all with alt text", "positive"
        )
    if images.with_alt > images.without_alt:
        return 10, ScoreFactor(
            "Images",
            f"{images.with_alt}/{images.total} have alt text",
            "neutral",
            f"Add alt text to {images.without_alt} images",
        )
    return 5, ScoreFactor(
        "Images",
        f"{images.without_alt}/{images.total} missing alt text",
        "negative",
        "Add descriptive alt text to all images",
    )


def _meta_description(description: Optional[str]) -> tuple[int, ScoreFactor]:
    if description and len(description) >= 120:
        return 15, ScoreFactor("Meta Description", f"{len(description)} chars", "positive")
    if description and len(description) >= 50:
        return 10, ScoreFactor(
            "Meta Description",
            f"{len(description)} chars",
            "neutral",
            "Expand meta description to 120-160 characters",
        )
    if description:
        return 5, ScoreFactor(
            "Meta Description",
            "Too short",
            "negative",
            "Write a compelling meta description (120-160 chars)",
        )
    return 0, ScoreFactor(
        "Meta Description",
        "Missing",
        "negative",
        "Add a meta description summarizing the page content",
    )


def analyze_structure(extraction: ExtractionResult) -> ScoreDetail:
    soup = extraction.soup
    results = [
        _headings(extract_headings(soup)),
        _lists(extract_lists(soup)),
        _schema(extraction.metadata),
        _images(extract_images(soup)),
        _meta_description(extraction.description),
    ]
    return build_detail(
        sum(points for points, _ in results),
        [factor for _, factor in results],
        DESCRIPTION,
    )
