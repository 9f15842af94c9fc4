"""Readability: how easily an answer engine can parse the page's prose.

Five factors, 20 points each: content length, sentence length, paragraph
structure, lexical complexity and active voice.
"""

from __future__ import annotations

import re
from typing import List

from geokit.analyzers.base import build_detail, compile_all, count_matches
from geokit.scanner.models import ExtractionResult, ScoreDetail, ScoreFactor

DESCRIPTION = "How easily AI engines can parse and understand your content"

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\n+")
_WORD_RE = re.compile(r"\b[a-z]+\b", re.ASCII)
_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")

_PASSIVE_PATTERNS = compile_all(
    [
        rf"\b{indicator}\b"
        for indicator in (
            "was",
            "were",
            "been",
            "being",
            "is being",
            "are being",
            "has been",
            "have been",
            "had been",
            "will be",
        )
    ]
)


def count_syllables(word: str) -> int:
    """Approximate the syllable count of an English *word*."""
    word = word.lower()
    if len(word) <= 3:
        return 1

    word = _SUFFIX_RE.sub("", word)
    if word.startswith("y"):
        word = word[1:]

    groups = _VOWEL_GROUP_RE.findall(word)
    return len(groups) if groups else 1


def split_sentences(text: str) -> List[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def _content_length(word_count: int) -> tuple[int, ScoreFactor]:
    value = f"{word_count} words"
    if word_count >= 1500:
        return 20, ScoreFactor("Content Length", value, "positive")
    if word_count >= 800:
        return 15, ScoreFactor(
            "Content Length",
            value,
            "neutral",
            "Consider adding more comprehensive content (1500+ words)",
        )
    if word_count >= 300:
        return 10, ScoreFactor(
            "Content Length",
            value,
            "negative",
            "Content is thin. AI engines prefer comprehensive coverage.",
        )
    return 0, ScoreFactor(
        "Content Length",
        value,
        "negative",
        "Very short content. Add substantial information for better AI visibility.",
    )


def _sentence_length(text: str, sentence_count: int) -> tuple[int, ScoreFactor]:
    # Below 8 words/sentence scores higher than above 25: kept as-is.
    avg = len(text.split()) / sentence_count if sentence_count else 0.0
    value = f"{avg:.1f} words/sentence"
    if 10 <= avg <= 20:
        return 20, ScoreFactor("Sentence Length", value, "positive")
    if 8 <= avg <= 25:
        return 15, ScoreFactor("Sentence Length", value, "neutral")
    if avg > 25:
        return 8, ScoreFactor(
            "Sentence Length",
            value,
            "negative",
            "Sentences are too long. Break them up for better readability.",
        )
    return 10, ScoreFactor(
        "Sentence Length",
        value,
        "negative",
        "Sentences are very short. Add more detail and context.",
    )


def _paragraphs(text: str) -> tuple[int, ScoreFactor]:
    count = sum(1 for p in _PARAGRAPH_SPLIT_RE.split(text) if len(p.strip()) > 50)
    value = f"{count} paragraphs"
    if count >= 5:
        return 20, ScoreFactor("Paragraph Structure", value, "positive")
    if count >= 3:
        return 15, ScoreFactor(
            "Paragraph Structure", value, "neutral", "Add more paragraphs to break up content"
        )
    return 5, ScoreFactor(
        "Paragraph Structure",
        value,
        "negative",
        "Content needs better paragraph organization",
    )


def _complexity(text: str) -> tuple[int, ScoreFactor]:
    words = _WORD_RE.findall(text.lower())
    complex_words = sum(1 for word in words if count_syllables(word) >= 3)
    ratio = complex_words / len(words) if words else 0.0
    if ratio <= 0.2:
        return 20, ScoreFactor("Reading Complexity", "Easy to read", "positive")
    if ratio <= 0.3:
        return 15, ScoreFactor("Reading Complexity", "Moderate", "neutral")
    return 8, ScoreFactor(
        "Reading Complexity",
        "Complex",
        "negative",
        "Simplify language for broader accessibility",
    )


def _active_voice(text: str, sentence_count: int) -> tuple[int, ScoreFactor]:
    passive = count_matches(_PASSIVE_PATTERNS, text)
    ratio = passive / sentence_count if sentence_count else 0.0
    if ratio <= 0.1:
        return 20, ScoreFactor("Active Voice", "Strong", "positive")
    if ratio <= 0.2:
        return 15, ScoreFactor("Active Voice", "Good", "neutral")
    return 8, ScoreFactor(
        "Active Voice",
        "Needs improvement",
        "negative",
        "Use more active voice for clearer communication",
    )


def analyze_readability(extraction: ExtractionResult) -> ScoreDetail:
    text = extraction.content.text
    sentence_count = len(split_sentences(text))

    results = [
        _content_length(extraction.content.word_count),
        _sentence_length(text, sentence_count),
        _paragraphs(text),
        _complexity(text),
        _active_voice(text, sentence_count),
    ]
    return build_detail(
        sum(points for points, _ in results),
        [factor for _, factor in results],
        DESCRIPTION,
    )
