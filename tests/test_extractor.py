"""Tests for content extraction and the document query helpers.

Mocking strategy:
- ``trafilatura.extract`` is patched (``no_trafilatura`` fixture, or an
  explicit return value) wherever a test depends on exactly which text was
  chosen as main content.
"""

from __future__ import annotations

from unittest.mock import patch

from bs4 import BeautifulSoup

from geokit.scanner.extractor import (
    _html_to_text,
    extract_content,
    extract_headings,
    extract_images,
    extract_links,
    extract_lists,
)
from geokit.scanner.models import ExtractionResult, Heading

_URL = "https://example.com/blog/post"

_FULL_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <title>Battery Guide</title>
  <meta name="description" content="Everything about batteries.">
  <meta property="og:title" content="OG Battery Guide">
  <meta property="og:image" content="/img/cover.png">
  <meta name="author" content="Jane Doe">
  <meta property="article:published_time" content="2024-01-02">
  <meta property="article:modified_time" content="2024-03-04">
  <link rel="icon" href="/favicon.ico">
  <script type="application/ld+json">{"@type": "Article", "headline": "x"}</script>
  <script type="application/ld+json">[{"@type": ["FAQPage", "Article"]}, {"@type": "Person"}]</script>
  <script type="application/ld+json">{ this is not json }</script>
</head>
<body>
  <nav><a href="/">Home</a></nav>
  <h1>Battery Guide</h1>
  <p>A battery is a device that stores chemical energy.</p>
  <p>Lithium cells dominate the market today.</p>
</body>
</html>
"""


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# extract_content
# ---------------------------------------------------------------------------

class TestExtractContent:
    def test_returns_extraction_result(self, no_trafilatura) -> None:
        result = extract_content(_FULL_HTML, _URL)

        assert isinstance(result, ExtractionResult)
        assert result.url == _URL
        assert result.title == "Battery Guide"
        assert result.description == "Everything about batteries."
        assert result.raw_html == _FULL_HTML

    def test_body_fallback_text_and_counts(self, no_trafilatura) -> None:
        result = extract_content(_FULL_HTML, _URL)

        assert "stores chemical energy" in result.content.text
        assert "this is not json" not in result.content.text
        assert result.content.word_count == len(result.content.text.split())
        assert result.content.reading_time == 1
        assert "<h1>Battery Guide</h1>" in result.content.html

    def test_uses_main_content_when_available(self) -> None:
        main = "<html><body><p>Only the article body.</p></body></html>"
        with patch("geokit.scanner.extractor.trafilatura.extract", return_value=main):
            result = extract_content(_FULL_HTML, _URL)

        assert result.content.text == "Only the article body."
        assert result.content.html == main
        assert result.content.word_count == 4

    def test_trafilatura_error_falls_back(self) -> None:
        with patch(
            "geokit.scanner.extractor.trafilatura.extract", side_effect=RuntimeError("boom")
        ):
            result = extract_content(_FULL_HTML, _URL)

        assert "Lithium cells" in result.content.text

    def test_reading_time_rounds_up(self, no_trafilatura) -> None:
        body = " ".join(["word"] * 201)
        result = extract_content(f"<html><body><p>{body}</p></body></html>", _URL)

        assert result.content.word_count == 201
        assert result.content.reading_time == 2

    def test_empty_html_does_not_raise(self, no_trafilatura) -> None:
        result = extract_content("", _URL)

        assert result.title == "Untitled"
        assert result.description is None
        assert result.content.text == ""
        assert result.content.word_count == 0
        assert result.content.reading_time == 0
        assert result.metadata.has_schema is False

    def test_malformed_html_does_not_raise(self, no_trafilatura) -> None:
        result = extract_content("<html><body><p>Unclosed <b>tags <div>", _URL)
        assert "Unclosed" in result.content.text


class TestTitleAndDescription:
    def test_og_title_fallback(self) -> None:
        html = '<html><head><meta property="og:title" content="From OG"></head></html>'
        assert extract_content(html, _URL).title == "From OG"

    def test_h1_fallback(self) -> None:
        html = "<html><body><h1> Heading Title </h1></body></html>"
        assert extract_content(html, _URL).title == "Heading Title"

    def test_empty_title_tag_falls_through(self) -> None:
        html = "<html><head><title>  </title></head><body><h1>H</h1></body></html>"
        assert extract_content(html, _URL).title == "H"

    def test_og_description_fallback(self) -> None:
        html = '<html><head><meta property="og:description" content="OG desc"></head></html>'
        assert extract_content(html, _URL).description == "OG desc"


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

class TestMetadata:
    def test_full_metadata(self, no_trafilatura) -> None:
        meta = extract_content(_FULL_HTML, _URL).metadata

        assert meta.favicon == "https://example.com/favicon.ico"
        assert meta.og_image == "https://example.com/img/cover.png"
        assert meta.author == "Jane Doe"
        assert meta.publish_date == "2024-01-02"
        assert meta.modified_date == "2024-03-04"
        assert meta.language == "en"

    def test_schema_types_deduplicated_and_malformed_skipped(self, no_trafilatura) -> None:
        meta = extract_content(_FULL_HTML, _URL).metadata

        assert meta.has_schema is True
        assert meta.schema_types == ("Article", "FAQPage", "Person")

    def test_no_schema(self) -> None:
        meta = extract_content("<html><body>x</body></html>", _URL).metadata
        assert meta.has_schema is False
        assert meta.schema_types == ()

    def test_deeply_nested_json_ld_is_skipped(self, no_trafilatura) -> None:
        nested = "[" * 100000 + "]" * 100000
        html = (
            f'<html><head><script type="application/ld+json">{nested}</script>'
            '<script type="application/ld+json">{"@type": "Article"}</script>'
            "</head><body><p>Still scanned.</p></body></html>"
        )
        result = extract_content(html, _URL)

        assert result.metadata.schema_types == ("Article",)
        assert "Still scanned." in result.content.text

    def test_favicon_precedence(self) -> None:
        html = """<html><head>
          <link rel="apple-touch-icon" href="/apple.png">
          <link rel="shortcut icon" href="/shortcut.ico">
        </head></html>"""
        meta = extract_content(html, _URL).metadata
        assert meta.favicon == "https://example.com/shortcut.ico"

    def test_absolute_favicon_kept(self) -> None:
        html = '<html><head><link rel="icon" href="https://cdn.example.net/f.ico"></head></html>'
        meta = extract_content(html, _URL).metadata
        assert meta.favicon == "https://cdn.example.net/f.ico"

    def test_author_fallbacks(self) -> None:
        html = '<html><head><meta property="article:author" content="A. Writer"></head></html>'
        assert extract_content(html, _URL).metadata.author == "A. Writer"

        html = '<html><body><a rel="author" href="/me"> Sam Smith </a></body></html>'
        assert extract_content(html, _URL).metadata.author == "Sam Smith"

    def test_missing_author_is_none(self) -> None:
        assert extract_content("<html></html>", _URL).metadata.author is None

    def test_date_fallbacks(self) -> None:
        html = """<html><head><meta name="last-modified" content="2023-05-05"></head>
        <body><time datetime="2023-04-04">April</time></body></html>"""
        meta = extract_content(html, _URL).metadata
        assert meta.publish_date == "2023-04-04"
        assert meta.modified_date == "2023-05-05"

    def test_language_from_meta(self) -> None:
        html = '<html><head><meta http-equiv="content-language" content="de"></head></html>'
        assert extract_content(html, _URL).metadata.language == "de"

    def test_missing_optional_metadata_is_none(self) -> None:
        meta = extract_content("<html><body></body></html>", _URL).metadata
        assert meta.favicon is None
        assert meta.og_image is None
        assert meta.publish_date is None
        assert meta.modified_date is None
        assert meta.language is None


# ---------------------------------------------------------------------------
# Plain-text rendering
# ---------------------------------------------------------------------------

class TestHtmlToText:
    def test_blocks_become_paragraphs(self) -> None:
        text = _html_to_text("<h2>Title</h2><p>First   para\n wrapped.</p><p>Second.</p>")
        assert text == "Title\n\nFirst para wrapped.\n\nSecond."

    def test_inline_elements_stay_joined(self) -> None:
        assert _html_to_text("<p>Bold<b>ly</b> go</p>") == "Boldly go"

    def test_scripts_and_styles_dropped(self) -> None:
        text = _html_to_text("<script>alert(1)</script><style>.a{}</style><p>Real</p>")
        assert text == "Real"


# ---------------------------------------------------------------------------
# Query helpers
# ---------------------------------------------------------------------------

class TestExtractHeadings:
    def test_levels_in_document_order(self) -> None:
        soup = _soup("<h2>B</h2><h1>A</h1><h3> </h3><h6>F</h6>")
        assert extract_headings(soup) == [
            Heading(level=2, text="B"),
            Heading(level=1, text="A"),
            Heading(level=6, text="F"),
        ]


class TestExtractLists:
    def test_counts(self) -> None:
        soup = _soup("<ul><li>a</li><li>b</li></ul><ol><li>c</li></ol><ul></ul>")
        stats = extract_lists(soup)
        assert stats.ordered == 1
        assert stats.unordered == 2
        assert stats.total_items == 3


class TestExtractLinks:
    def test_internal_vs_external(self) -> None:
        soup = _soup(
            '<a href="/about">a</a>'
            '<a href="https://example.com/x">b</a>'
            '<a href="https://other.org/">c</a>'
            '<a href="#top">skip</a>'
            '<a href="javascript:void(0)">skip</a>'
            '<a>no href</a>'
        )
        stats = extract_links(soup, _URL)
        assert stats.internal == 2
        assert stats.external == 1
        assert stats.total == 3

    def test_malformed_href_counts_internal(self) -> None:
        soup = _soup('<a href="http://[::1">bad</a>')
        stats = extract_links(soup, _URL)
        assert stats.internal == 1
        assert stats.external == 0


class TestExtractImages:
    def test_alt_counts(self) -> None:
        soup = _soup('<img src="a" alt="A"><img src="b" alt=" "><img src="c">')
        stats = extract_images(soup)
        assert stats.with_alt == 1
        assert stats.without_alt == 2
        assert stats.total == 3
