"""Source credibility: the E-E-A-T signals an answer engine looks for.

Author byline, publication dates, outbound citations, site trust pages
and stated expertise.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from geokit.analyzers.base import build_detail, compile_all, count_matches
from geokit.scanner.extractor import extract_links
from geokit.scanner.models import (
    ExtractionResult,
    PageMetadata,
    ScoreDetail,
    ScoreFactor,
)

DESCRIPTION = "Credibility signals that make AI trust your content"

BYLINE_WINDOW = 5000

AUTHOR_CONTEXT_PATTERNS = (
    re.compile(r"author", re.IGNORECASE),
    re.compile(r"written by", re.IGNORECASE),
    re.compile(r"by\s+[A-Z][a-z]+"),
    re.compile(r"expert", re.IGNORECASE),
    re.compile(r"specialist", re.IGNORECASE),
)

CITATION_PATTERNS = (
    *compile_all([r"according to", r"research by", r"study by", r"source:"]),
    re.compile(r"\[\d+\]", re.ASCII),
    re.compile(r"\(\d{4}\)", re.ASCII),
)

EXPERTISE_PATTERNS = compile_all(
    [
        r"years of experience",
        r"certified",
        r"licensed",
        r"expert",
        r"professional",
        r"specialist",
        r"PhD|Ph\.D\.|doctorate",
        r"MD|M\.D\.",
        r"award",
        r"recognized",
    ]
)

_CONTACT_RE = re.compile(r"contact|email|phone|address", re.IGNORECASE)
_PRIVACY_RE = re.compile(r"privacy", re.IGNORECASE)
_ABOUT_RE = re.compile(r"about", re.IGNORECASE)


def trust_signals(soup: BeautifulSoup, raw_html: str) -> dict[str, bool]:
    """Evaluate the four site-level trust checks."""
    anchors = soup.find_all("a")
    anchor_text = "".join(a.get_text() for a in anchors)
    hrefs = [a.get("href") or "" for a in anchors]

    return {
        # Pages are only scored after a successful fetch over http(s).
        "has_https": True,
        "has_contact_info": bool(_CONTACT_RE.search(raw_html))
        or any(h.startswith("mailto:") for h in hrefs),
        "has_privacy_policy": bool(_PRIVACY_RE.search(anchor_text))
        or any("privacy" in h for h in hrefs),
        "has_about_page": bool(_ABOUT_RE.search(anchor_text))
        or any("about" in h for h in hrefs),
    }


def _author(metadata: PageMetadata, raw_html: str) -> tuple[int, ScoreFactor]:
    if not metadata.author:
        return 0, ScoreFactor(
            "Author Info",
            "Missing",
            "negative",
            "Add author name and credentials - critical for E-E-A-T",
        )

    head = raw_html[:BYLINE_WINDOW]
    if any(p.search(head) for p in AUTHOR_CONTEXT_PATTERNS):
        return 25, ScoreFactor("Author Info", metadata.author, "positive")
    return 18, ScoreFactor(
        "Author Info",
        metadata.author,
        "neutral",
        "Add author bio/credentials to boost credibility",
    )


def _dates(metadata: PageMetadata) -> tuple[int, ScoreFactor]:
    published = bool(metadata.publish_date)
    modified = bool(metadata.modified_date)

    if published and modified:
        return 20, ScoreFactor("Date Information", "Published & Updated dates", "positive")
    if published or modified:
        return 12, ScoreFactor(
            "Date Information",
            "Published date only" if published else "Updated date only",
            "neutral",
            "Add both publication and last-updated dates",
        )
    return 0, ScoreFactor(
        "Date Information",
        "Missing",
        "negative",
        "Add visible publication and update dates",
    )


def _citations(external_links: int, text: str) -> tuple[int, ScoreFactor]:
    citations = count_matches(CITATION_PATTERNS, text)

    if external_links >= 5 and citations >= 2:
        return 25, ScoreFactor(
            "Citations & Sources",
            f"{external_links} external links, {citations} citations",
            "positive",
        )
    if external_links >= 2 or citations >= 1:
        return 15, ScoreFactor(
            "Citations & Sources",
            f"{external_links} links, {citations} citations",
            "neutral",
            "Add more external references to authoritative sources",
        )
    return 5, ScoreFactor(
        "Citations & Sources",
        "Minimal",
        "negative",
        "Link to authoritative sources - AI engines verify claims",
    )


def _trust(signals: dict[str, bool]) -> tuple[int, ScoreFactor]:
    present = sum(signals.values())
    if present >= 3:
        return 15, ScoreFactor("Trust Signals", f"{present}/4 signals present", "positive")
    if present >= 2:
        return 10, ScoreFactor(
            "Trust Signals",
            f"{present}/4 signals",
            "neutral",
            "Add contact info, about page, and privacy policy links",
        )
    return 5, ScoreFactor(
        "Trust Signals",
        f"{present}/4 signals",
        "negative",
        "Add trust indicators: contact info, about page, privacy policy",
    )


def _expertise(text: str) -> tuple[int, ScoreFactor]:
    count = count_matches(EXPERTISE_PATTERNS, text)
    if count >= 3:
        return 15, ScoreFactor("Expertise Signals", f"{count} credentials mentioned", "positive")
    if count >= 1:
        return 10, ScoreFactor(
            "Expertise Signals",
            f"{count} credentials",
            "neutral",
            "Highlight author credentials and experience",
        )
    return 3, ScoreFactor(
        "Expertise Signals",
        "None detected",
        "negative",
        "Demonstrate expertise: certifications, experience, credentials",
    )


def analyze_sources(extraction: ExtractionResult) -> ScoreDetail:
    soup = extraction.soup
    text = extraction.content.text
    links = extract_links(soup, extraction.url)

    results = [
        _author(extraction.metadata, extraction.raw_html),
        _dates(extraction.metadata),
        _citations(links.external, text),
        _trust(trust_signals(soup, extraction.raw_html)),
        _expertise(text),
    ]
    return build_detail(
        sum(points for points, _ in results),
        [factor for _, factor in results],
        DESCRIPTION,
    )
