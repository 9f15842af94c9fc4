"""Scanner package — page fetch, content extraction and the scan pipeline."""

from geokit.scanner.extractor import extract_content
from geokit.scanner.fetcher import FetchError, fetch_page, is_valid_url, normalize_url
from geokit.scanner.models import (
    CategoryScores,
    ExtractedContent,
    ExtractionResult,
    FetchedPage,
    Insight,
    PageMetadata,
    ScanResult,
    ScoreDetail,
    ScoreFactor,
    score_label,
)
from geokit.scanner.scan import build_scan_result, run_analyzers, scan, scan_url

__all__ = [
    "scan",
    "scan_url",
    "build_scan_result",
    "run_analyzers",
    "fetch_page",
    "extract_content",
    "normalize_url",
    "is_valid_url",
    "FetchError",
    "FetchedPage",
    "ExtractedContent",
    "ExtractionResult",
    "PageMetadata",
    "ScoreFactor",
    "ScoreDetail",
    "CategoryScores",
    "Insight",
    "ScanResult",
    "score_label",
]
