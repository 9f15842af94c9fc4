"""The scan pipeline: fetch → extract → analyze → aggregate.

Only the fetch stage can fail.  Once HTML is in hand, extraction and
analysis always run to completion and produce a :class:`ScanResult`.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional

from geokit.analyzers import ANALYZERS, compute_overall_score, generate_insights
from geokit.config import settings
from geokit.logger import get_logger
from geokit.scanner.extractor import extract_content
from geokit.scanner.fetcher import fetch_page, normalize_url
from geokit.scanner.models import CategoryScores, ExtractionResult, FetchedPage, ScanResult

logger = get_logger(__name__)


def run_analyzers(extraction: ExtractionResult) -> CategoryScores:
    """Run the four analyzers against *extraction*.

    The analyzers share the extraction read-only, so they run on a
    ``ThreadPoolExecutor`` when ``settings.analyzer_workers > 1``.  The result
    does not depend on which path is taken.
    """
    workers = min(settings.analyzer_workers, len(ANALYZERS))
    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            details = list(pool.map(lambda analyze: analyze(extraction), ANALYZERS.values()))
    else:
        details = [analyze(extraction) for analyze in ANALYZERS.values()]

    return CategoryScores(**dict(zip(ANALYZERS.keys(), details)))


def build_scan_result(page: FetchedPage, scanned_at: Optional[datetime] = None) -> ScanResult:
    """Extract and score an already-fetched page.

    Deterministic apart from ``scanned_at``, which defaults to now (UTC).
    """
    url = page.final_url
    extraction = extract_content(page.html, url)
    scores = run_analyzers(extraction)
    insights = generate_insights(scores, extraction)
    stamp = scanned_at or datetime.now(timezone.utc)

    return ScanResult(
        url=url,
        title=extraction.title,
        description=extraction.description,
        content=extraction.content,
        scores=scores,
        overall_score=compute_overall_score(scores),
        insights=tuple(insights),
        metadata=extraction.metadata,
        scanned_at=stamp.isoformat(),
    )


async def scan_url(raw_url: str) -> ScanResult:
    """Normalize *raw_url*, fetch it and return its :class:`ScanResult`.

    Raises:
        ValueError: If *raw_url* is not a well-formed URL.
        FetchError: If the page cannot be fetched as HTML.
    """
    url = normalize_url(raw_url)
    page = await fetch_page(url)
    # CPU-bound from here on; keep it off the event loop.
    result = await asyncio.to_thread(build_scan_result, page)
    logger.info(
        "Scanned %s: overall=%d insights=%d",
        result.url,
        result.overall_score,
        len(result.insights),
    )
    return result


def scan(raw_url: str) -> ScanResult:
    """Blocking wrapper around :func:`scan_url`."""
    return asyncio.run(scan_url(raw_url))
