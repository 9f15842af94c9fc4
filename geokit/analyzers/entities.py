"""Entity clarity: does the page define its topic, answer questions and cite facts?"""

from __future__ import annotations

import re

from geokit.analyzers.base import build_detail, compile_all, count_matches
from geokit.scanner.models import ExtractionResult, ScoreDetail, ScoreFactor

DESCRIPTION = "How clearly your content presents facts and answers questions"

QUESTION_PATTERNS = compile_all(
    [
        r"what is",
        r"how to",
        r"how do",
        r"why is",
        r"when should",
        r"where can",
        r"who is",
        r"which is",
        r"can you",
        r"does it",
    ]
)

# Digits are ASCII only; other Unicode numerals are not counted as data.
FACT_PATTERNS = (
    re.compile(r"\d+%", re.ASCII),
    re.compile(r"\$[\d,]+", re.ASCII),
    re.compile(r"\d{4}", re.ASCII),
    re.compile(r"\d+ (?:million|billion|thousand)", re.IGNORECASE | re.ASCII),
    *compile_all([r"according to", r"research shows", r"studies indicate", r"data suggests"]),
)

DEFINITION_PATTERNS = compile_all(
    [
        r"is defined as",
        r"refers to",
        r"means that",
        r"is a type of",
        r"is known as",
        r"is characterized by",
    ]
)

COMPARISON_PATTERNS = compile_all(
    [
        r"better than",
        r"compared to",
        r"versus",
        r"vs\.",
        r"alternative to",
        r"similar to",
        r"unlike",
        r"difference between",
    ]
)

_ENTITY_RE = re.compile(r"[A-Z][a-z]+(?:\s[A-Z][a-z]+)*")
_ENTITY_STOPWORDS = frozenset({"The", "This", "That", "These", "Those"})


def named_entities(text: str) -> list[str]:
    """Distinct capitalised phrases longer than three characters, first-seen order."""
    seen: list[str] = []
    for match in _ENTITY_RE.findall(text):
        if len(match) > 3 and match not in _ENTITY_STOPWORDS and match not in seen:
            seen.append(match)
    return seen


def _topic_definition(text: str, title: str) -> tuple[int, ScoreFactor]:
    first_paragraph = text.split("\n\n")[0]
    has_definition = any(p.search(first_paragraph) for p in DEFINITION_PATTERNS)
    title_in_content = bool(title) and title.lower()[:20] in text.lower()

    if has_definition and title_in_content:
        return 25, ScoreFactor("Topic Definition", "Clear and explicit", "positive")
    if has_definition or title_in_content:
        return 18, ScoreFactor(
            "Topic Definition",
            "Present",
            "neutral",
            "Add a clear definition of your topic in the first paragraph",
        )
    return 8, ScoreFactor(
        "Topic Definition",
        "Unclear",
        "negative",
        "Start with a clear definition: 'X is...' or 'X refers to...'",
    )


def _questions(text: str) -> tuple[int, ScoreFactor]:
    count = count_matches(QUESTION_PATTERNS, text)
    value = f"{count} question patterns"
    if count >= 5:
        return 25, ScoreFactor("Questions Addressed", value, "positive")
    if count >= 2:
        return 15, ScoreFactor(
            "Questions Addressed",
            value,
            "neutral",
            "Add more 'What is', 'How to', 'Why' sections for AI Q&A",
        )
    return 5, ScoreFactor(
        "Questions Addressed",
        value,
        "negative",
        "Structure content around common questions (What, How, Why)",
    )


def _facts(text: str) -> tuple[int, ScoreFactor]:
    count = count_matches(FACT_PATTERNS, text)
    value = f"{count} data points"
    if count >= 5:
        return 25, ScoreFactor("Facts & Statistics", value, "positive")
    if count >= 2:
        return 15, ScoreFactor(
            "Facts & Statistics",
            value,
            "neutral",
            "Add more specific numbers, statistics, and citations",
        )
    return 5, ScoreFactor(
        "Facts & Statistics",
        value,
        "negative",
        "Include statistics, percentages, and specific data - AI loves citing facts",
    )


def _entities(text: str) -> tuple[int, ScoreFactor]:
    count = len(named_entities(text))
    if count >= 10:
        return 15, ScoreFactor("Named Entities", f"{count} unique entities", "positive")
    if count >= 5:
        return 10, ScoreFactor("Named Entities", f"{count} unique entities", "neutral")
    return 5, ScoreFactor(
        "Named Entities",
        f"{count} entities",
        "negative",
        "Reference specific tools, companies, or concepts by name",
    )


def _comparisons(text: str) -> tuple[int, ScoreFactor]:
    count = count_matches(COMPARISON_PATTERNS, text)
    if count >= 3:
        return 10, ScoreFactor("Comparisons", f"{count} comparison phrases", "positive")
    if count >= 1:
        return 6, ScoreFactor(
            "Comparisons",
            f"{count} comparison phrases",
            "neutral",
            "Add comparisons (X vs Y, better than, compared to)",
        )
    return 2, ScoreFactor(
        "Comparisons",
        "None found",
        "negative",
        "Include comparisons to help AI understand context",
    )


def analyze_entities(extraction: ExtractionResult) -> ScoreDetail:
    text = extraction.content.text
    results = [
        _topic_definition(text, extraction.title),
        _questions(text),
        _facts(text),
        _entities(text),
        _comparisons(text),
    ]
    return build_detail(
        sum(points for points, _ in results),
        [factor for _, factor in results],
        DESCRIPTION,
    )
