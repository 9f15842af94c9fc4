"""GeoKit CLI — score a page's AI visibility from the terminal.

Usage:
    python cli/main.py --help

Commands:
    scan      fetch a URL and score it
    analyze   score a saved HTML file without touching the network
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from geokit.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json

import typer

from cli.rendering import render_report
from geokit.scanner import FetchError, FetchedPage, build_scan_result, normalize_url, scan
from geokit.scanner.models import ScanResult

app = typer.Typer(
    name="geokit",
    help="AI visibility scanner.",
    no_args_is_help=True,
)


def _emit(result: ScanResult, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(render_report(result), nl=False)


@app.command("scan")
def scan_command(
    url: str = typer.Argument(..., help="Page to scan (scheme optional)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON."),
) -> None:
    """Fetch URL and print its AI visibility report."""
    try:
        result = scan(url)
    except FetchError as exc:
        status = f" (HTTP {exc.status_code})" if exc.status_code else ""
        typer.echo(f"Error: {exc.message}{status}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    _emit(result, as_json)


@app.command("analyze")
def analyze_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved HTML file."),
    url: str = typer.Option(..., "--url", help="URL the page was served from."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON."),
) -> None:
    """Score a local HTML file as if it had been fetched from URL."""
    try:
        page_url = normalize_url(url)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    html = path.read_text(encoding="utf-8", errors="replace")
    page = FetchedPage(url=page_url, html=html, status_code=200)
    _emit(build_scan_result(page), as_json)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
