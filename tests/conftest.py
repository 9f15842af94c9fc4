"""Shared fixtures for the GeoKit test suite."""

from __future__ import annotations

from typing import Callable, Optional
from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from geokit.config import settings
from geokit.scanner.models import ExtractedContent, ExtractionResult, PageMetadata


@pytest.fixture(autouse=True)
def _sequential_analyzers(monkeypatch):
    """Keep analyzer execution on the test thread unless a test opts in."""
    monkeypatch.setattr(settings, "analyzer_workers", 1)


@pytest.fixture()
def no_trafilatura():
    """Force the extractor onto its document-body fallback."""
    with patch("geokit.scanner.extractor.trafilatura.extract", return_value=None):
        yield


@pytest.fixture()
def make_extraction() -> Callable[..., ExtractionResult]:
    """Build an :class:`ExtractionResult` directly, bypassing the extractor."""

    def _make(
        text: str = "",
        html: str = "<html><body></body></html>",
        title: str = "Untitled",
        description: Optional[str] = None,
        metadata: Optional[PageMetadata] = None,
        url: str = "https://example.com/article",
    ) -> ExtractionResult:
        word_count = len(text.split())
        return ExtractionResult(
            url=url,
            title=title,
            description=description,
            content=ExtractedContent(
                text=text,
                html=html,
                word_count=word_count,
                reading_time=-(-word_count // 200),
            ),
            metadata=metadata or PageMetadata(),
            raw_html=html,
            soup=BeautifulSoup(html, "html.parser"),
        )

    return _make
