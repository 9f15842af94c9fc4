"""Content extraction: turns raw HTML into an :class:`ExtractionResult`.

Extraction never raises.  Missing or malformed pieces resolve to safe
defaults ("Untitled", empty text, ``None`` metadata) so a scan always
completes once the fetch succeeded.
"""

from __future__ import annotations

import json
import math
import re
from typing import List, Optional
from urllib.parse import urljoin, urlsplit

import trafilatura
from bs4 import BeautifulSoup, Tag

from geokit.logger import get_logger
from geokit.scanner.models import (
    ExtractedContent,
    ExtractionResult,
    Heading,
    ImageStats,
    LinkStats,
    ListStats,
    PageMetadata,
)

logger = get_logger(__name__)

WORDS_PER_MINUTE = 200

_PARSER = "html.parser"

# Elements whose boundaries start a new paragraph in the plain-text rendering.
_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "dd", "details", "div", "dl",
    "dt", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre",
    "section", "table", "td", "th", "tr", "ul",
]
_NON_TEXT_TAGS = ["script", "style", "noscript", "template"]
_BLOCK_MARK = "\x00"
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _attr(soup: BeautifulSoup, selector: str, name: str) -> Optional[str]:
    """Return attribute *name* of the first element matching *selector*.

    Empty values count as missing so that fallback chains move on.
    """
    el = soup.select_one(selector)
    if el is None:
        return None
    value = el.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def _text(el: Optional[Tag]) -> str:
    return el.get_text().strip() if el is not None else ""


def _resolve(href: Optional[str], base_url: str) -> Optional[str]:
    """Resolve a possibly relative *href* against *base_url*."""
    if not href:
        return None
    if href.startswith("http"):
        return href
    try:
        resolved = urljoin(base_url, href)
        parts = urlsplit(resolved)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return resolved


def _html_to_text(markup: str) -> str:
    """Render *markup* as plain text with blank lines between blocks.

    Whitespace inside a block is collapsed to single spaces; block-level
    elements become paragraphs separated by ``"\\n\\n"``.
    """
    soup = BeautifulSoup(markup, _PARSER)
    for tag in soup(_NON_TEXT_TAGS):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with(" ")
    for block in soup.find_all(_BLOCK_TAGS):
        block.insert_before(_BLOCK_MARK)
        block.insert_after(_BLOCK_MARK)

    chunks = (
        _WHITESPACE_RE.sub(" ", chunk).strip()
        for chunk in soup.get_text().split(_BLOCK_MARK)
    )
    return "\n\n".join(chunk for chunk in chunks if chunk)


def _main_content(html: str, url: str) -> Optional[str]:
    """Return the boilerplate-free main content markup, or ``None``."""
    try:
        return trafilatura.extract(
            html,
            url=url,
            output_format="html",
            include_comments=False,
            include_tables=True,
            include_images=False,
            include_links=False,
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning("Main-content extraction failed for %s: %s", url, exc)
        return None


def _body_fallback(soup: BeautifulSoup) -> tuple[str, str]:
    """Return ``(text, html)`` for the whole document body."""
    body = soup.body
    markup = body.decode_contents() if body is not None else str(soup)
    return _html_to_text(markup), markup


def _extract_title(soup: BeautifulSoup) -> str:
    return (
        _text(soup.find("title"))
        or _attr(soup, 'meta[property="og:title"]', "content")
        or _text(soup.find("h1"))
        or "Untitled"
    )


def _extract_description(soup: BeautifulSoup) -> Optional[str]:
    return _attr(soup, 'meta[name="description"]', "content") or _attr(
        soup, 'meta[property="og:description"]', "content"
    )


def _extract_favicon(soup: BeautifulSoup, url: str) -> Optional[str]:
    links = soup.find_all("link", rel=True, href=True)
    for rel in ("icon", "shortcut icon", "apple-touch-icon"):
        for link in links:
            link_rel = link.get("rel")
            if isinstance(link_rel, list):
                link_rel = " ".join(link_rel)
            if link_rel.lower() == rel and link.get("href"):
                return _resolve(link["href"], url)
    return None


def _extract_schema_types(soup: BeautifulSoup) -> List[str]:
    """Collect every ``@type`` from the page's JSON-LD blocks, deduplicated.

    Malformed or pathologically nested blocks are skipped.
    """
    types: List[str] = []
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        payload = script.string or script.get_text()
        if not payload or not payload.strip():
            continue
        try:
            data = json.loads(payload)
        except (ValueError, RecursionError):
            continue

        items = data if isinstance(data, list) else [data]
        for item in items:
            if not isinstance(item, dict) or not item.get("@type"):
                continue
            found = item["@type"]
            for value in found if isinstance(found, list) else [found]:
                if isinstance(value, str) and value not in types:
                    types.append(value)
    return types


def _extract_metadata(soup: BeautifulSoup, url: str) -> PageMetadata:
    author = (
        _attr(soup, 'meta[name="author"]', "content")
        or _attr(soup, 'meta[property="article:author"]', "content")
        or "".join(el.get_text() for el in soup.select('[rel="author"]')).strip()
        or None
    )

    publish_date = (
        _attr(soup, 'meta[property="article:published_time"]', "content")
        or _attr(soup, 'meta[name="publish-date"]', "content")
        or _attr(soup, "time[datetime]", "datetime")
    )
    modified_date = _attr(
        soup, 'meta[property="article:modified_time"]', "content"
    ) or _attr(soup, 'meta[name="last-modified"]', "content")

    html_tag = soup.find("html")
    language = (html_tag.get("lang") or None) if html_tag is not None else None
    language = language or _attr(soup, 'meta[http-equiv="content-language"]', "content")

    schema_types = _extract_schema_types(soup)

    return PageMetadata(
        favicon=_extract_favicon(soup, url),
        og_image=_resolve(_attr(soup, 'meta[property="og:image"]', "content"), url),
        author=author,
        publish_date=publish_date,
        modified_date=modified_date,
        language=language,
        has_schema=bool(schema_types),
        schema_types=tuple(schema_types),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_content(html: str, url: str) -> ExtractionResult:
    """Extract title, main content and metadata from *html*.

    Tries ``trafilatura`` first for boilerplate removal.  Falls back to the
    full document body when it returns nothing usable.  Word count and
    reading time always come from the text that was finally chosen.
    """
    soup = BeautifulSoup(html, _PARSER)

    text = ""
    content_html = _main_content(html, url) or ""
    if content_html:
        text = _html_to_text(content_html)
    if not text:
        logger.debug("No main content isolated for %s; using document body", url)
        text, content_html = _body_fallback(BeautifulSoup(html, _PARSER))

    word_count = len(text.split())
    content = ExtractedContent(
        text=text,
        html=content_html,
        word_count=word_count,
        reading_time=math.ceil(word_count / WORDS_PER_MINUTE),
    )

    return ExtractionResult(
        url=url,
        title=_extract_title(soup),
        description=_extract_description(soup),
        content=content,
        metadata=_extract_metadata(soup, url),
        raw_html=html,
        soup=soup,
    )


# ---------------------------------------------------------------------------
# Document queries used by the analyzers
# ---------------------------------------------------------------------------

def extract_headings(soup: BeautifulSoup) -> List[Heading]:
    """Return every non-empty ``h1``–``h6`` in document order."""
    headings: List[Heading] = []
    for el in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        text = _text(el)
        if text:
            headings.append(Heading(level=int(el.name[1]), text=text))
    return headings


def extract_lists(soup: BeautifulSoup) -> ListStats:
    return ListStats(
        ordered=len(soup.find_all("ol")),
        unordered=len(soup.find_all("ul")),
        total_items=len(soup.find_all("li")),
    )


def extract_links(soup: BeautifulSoup, base_url: str) -> LinkStats:
    """Count internal vs. external ``<a href>`` links relative to *base_url*.

    Fragment and ``javascript:`` links are ignored; hrefs that cannot be
    parsed count as internal.
    """
    try:
        base_host = urlsplit(base_url).hostname
    except ValueError:
        return LinkStats(internal=0, external=0)

    internal = external = 0
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if not href or href.startswith("#") or href.startswith("javascript:"):
            continue
        try:
            host = urlsplit(urljoin(base_url, href)).hostname
        except ValueError:
            internal += 1
            continue
        if host == base_host:
            internal += 1
        else:
            external += 1

    return LinkStats(internal=internal, external=external)


def extract_images(soup: BeautifulSoup) -> ImageStats:
    with_alt = without_alt = 0
    for img in soup.find_all("img"):
        alt = img.get("alt")
        if alt and alt.strip():
            with_alt += 1
        else:
            without_alt += 1
    return ImageStats(with_alt=with_alt, without_alt=without_alt)
