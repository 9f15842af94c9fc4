"""Tests for the geokit CLI."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from cli.main import app
from geokit.scanner import FetchError, build_scan_result
from geokit.scanner.models import FetchedPage

runner = CliRunner()

_HTML = """\
<html>
<head><title>Saved page</title><meta name="author" content="Jane Doe"></head>
<body><h1>Saved page</h1><p>Offline body text for the report.</p></body>
</html>
"""


def _write_page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(_HTML, encoding="utf-8")
    return path


def test_analyze_renders_report(tmp_path, no_trafilatura):
    result = runner.invoke(app, ["analyze", str(_write_page(tmp_path)), "--url", "example.com"])

    assert result.exit_code == 0
    assert "Saved page" in result.stdout
    assert "https://example.com" in result.stdout
    assert "AI visibility score:" in result.stdout
    assert "Source Credibility" in result.stdout
    assert "Insights:" in result.stdout


def test_analyze_json(tmp_path, no_trafilatura):
    result = runner.invoke(
        app, ["analyze", str(_write_page(tmp_path)), "--url", "https://example.com/p", "--json"]
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["url"] == "https://example.com/p"
    assert data["metadata"]["author"] == "Jane Doe"
    assert 0 <= data["overall_score"] <= 100


def test_analyze_missing_file(tmp_path):
    result = runner.invoke(app, ["analyze", str(tmp_path / "nope.html"), "--url", "example.com"])
    assert result.exit_code != 0


def test_analyze_bad_url(tmp_path):
    result = runner.invoke(app, ["analyze", str(_write_page(tmp_path)), "--url", "https://"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_scan_prints_report(no_trafilatura):
    page = FetchedPage(url="https://example.com", html=_HTML, status_code=200)
    with patch("cli.main.scan", return_value=build_scan_result(page)) as mock_scan:
        result = runner.invoke(app, ["scan", "example.com"])

    assert result.exit_code == 0
    assert "Saved page" in result.stdout
    mock_scan.assert_called_once_with("example.com")


def test_scan_fetch_error_exits_1():
    exc = FetchError("Failed to fetch page: Not Found", status_code=404, reason="http_status")
    with patch("cli.main.scan", side_effect=exc):
        result = runner.invoke(app, ["scan", "example.com/missing"])

    assert result.exit_code == 1
    assert "Failed to fetch page: Not Found (HTTP 404)" in result.output


def test_scan_invalid_url_exits_1():
    with patch("cli.main.scan", side_effect=ValueError("Invalid URL: 'https://'")):
        result = runner.invoke(app, ["scan", "https://"])

    assert result.exit_code == 1
    assert "Invalid URL" in result.output
