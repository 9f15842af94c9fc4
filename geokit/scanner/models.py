"""Data models for the scan pipeline.

Every record is created fresh for a single scan and never mutated once the
stage that produced it has finished, hence the frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, Literal, Optional, Tuple, Union

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

Impact = Literal["positive", "neutral", "negative"]
InsightType = Literal["improvement", "warning", "success"]
InsightImpact = Literal["high", "medium", "low"]
Category = Literal["readability", "structure", "entities", "sources"]
FactorValue = Union[str, int, float, bool]

MAX_SCORE = 100


def score_label(percentage: int) -> str:
    """Map a 0-100 percentage to its human-readable band."""
    if percentage >= 80:
        return "Excellent"
    if percentage >= 60:
        return "Good"
    if percentage >= 40:
        return "Needs Work"
    return "Poor"


# ---------------------------------------------------------------------------
# Fetch / extraction
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FetchedPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    redirected_url: Optional[str] = None

    @property
    def final_url(self) -> str:
        return self.redirected_url or self.url


@dataclass(frozen=True)
class ExtractedContent:
    """De-boilerplated main content of a page."""

    text: str
    html: str
    word_count: int
    reading_time: int


@dataclass(frozen=True)
class PageMetadata:
    favicon: Optional[str] = None
    og_image: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[str] = None
    modified_date: Optional[str] = None
    language: Optional[str] = None
    has_schema: bool = False
    schema_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtractionResult:
    """Everything the analyzers need to know about one page.

    ``soup`` is the parsed full document.  It is shared by all analyzers and
    must be treated as read-only.
    """

    url: str
    title: str
    description: Optional[str]
    content: ExtractedContent
    metadata: PageMetadata
    raw_html: str
    soup: "BeautifulSoup" = field(repr=False, compare=False)


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class ListStats:
    ordered: int
    unordered: int
    total_items: int


@dataclass(frozen=True)
class LinkStats:
    internal: int
    external: int

    @property
    def total(self) -> int:
        return self.internal + self.external


@dataclass(frozen=True)
class ImageStats:
    with_alt: int
    without_alt: int

    @property
    def total(self) -> int:
        return self.with_alt + self.without_alt


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoreFactor:
    name: str
    value: FactorValue
    impact: Impact
    suggestion: Optional[str] = None


@dataclass(frozen=True)
class ScoreDetail:
    score: int
    max_score: int
    percentage: int
    label: str
    description: str
    factors: Tuple[ScoreFactor, ...]


@dataclass(frozen=True)
class CategoryScores:
    readability: ScoreDetail
    structure: ScoreDetail
    entities: ScoreDetail
    sources: ScoreDetail

    def items(self) -> Iterator[Tuple[Category, ScoreDetail]]:
        """Yield ``(category, detail)`` pairs in fixed category order."""
        yield "readability", self.readability
        yield "structure", self.structure
        yield "entities", self.entities
        yield "sources", self.sources


@dataclass(frozen=True)
class Insight:
    type: InsightType
    category: Category
    title: str
    description: str
    impact: InsightImpact
    action: Optional[str] = None


@dataclass(frozen=True)
class ScanResult:
    """The sole artifact a scan hands back to its caller."""

    url: str
    title: str
    description: Optional[str]
    content: ExtractedContent
    scores: CategoryScores
    overall_score: int
    insights: Tuple[Insight, ...]
    metadata: PageMetadata
    scanned_at: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation (tuples become lists)."""
        return _listify(asdict(self))


def _listify(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _listify(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(v) for v in value]
    return value
