"""HTTP fetcher: one GET per scan, bounded by a wall-clock timeout."""

from __future__ import annotations

import asyncio
import re
from typing import Literal, Optional
from urllib.parse import urlsplit, urlunsplit

import httpx

from geokit.config import settings
from geokit.logger import get_logger
from geokit.scanner.models import FetchedPage

logger = get_logger(__name__)

FetchFailure = Literal["http_status", "not_html", "timeout", "network"]

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


class FetchError(Exception):
    """Raised when a page cannot be retrieved as HTML.

    ``status_code`` is only set when the server answered with a non-2xx
    status; ``reason`` tells the caller which of the four failure modes hit.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        reason: FetchFailure = "network",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url
        self.reason = reason

    def __repr__(self) -> str:
        return (
            f"FetchError(message={self.message!r}, status_code={self.status_code!r}, "
            f"url={self.url!r}, reason={self.reason!r})"
        )


def _request_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": settings.accept_language,
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


async def _get(url: str) -> FetchedPage:
    async with httpx.AsyncClient(
        headers=_request_headers(),
        timeout=settings.fetch_timeout,
        follow_redirects=True,
    ) as client:
        response = await client.get(url)

        if not response.is_success:
            raise FetchError(
                f"Failed to fetch page: {response.reason_phrase}",
                status_code=response.status_code,
                url=url,
                reason="http_status",
            )

        content_type = response.headers.get("content-type", "").lower()
        if not any(kind in content_type for kind in _HTML_CONTENT_TYPES):
            raise FetchError(
                "URL does not return HTML content", url=url, reason="not_html"
            )

        final_url = str(response.url)
        return FetchedPage(
            url=url,
            html=response.text,
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            redirected_url=final_url if final_url.rstrip("/") != url.rstrip("/") else None,
        )


async def fetch_page(url: str) -> FetchedPage:
    """Fetch *url* and return a :class:`FetchedPage`.

    The whole exchange (connect, redirects, body) must finish within
    ``settings.fetch_timeout`` seconds; on expiry the in-flight request is
    cancelled.  There are no retries.

    Raises:
        FetchError: On a non-2xx status, a non-HTML content type, a timeout
            or any transport failure.
    """
    logger.info("Fetching %s", url)
    try:
        return await asyncio.wait_for(_get(url), timeout=settings.fetch_timeout)
    except FetchError as exc:
        logger.warning("Fetch of %s failed: %s", url, exc.message)
        raise
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        logger.warning("Fetch of %s timed out", url)
        raise FetchError("Request timed out", url=url, reason="timeout") from exc
    except httpx.HTTPError as exc:
        logger.warning("Fetch of %s failed: %s", url, exc)
        raise FetchError(f"Failed to fetch: {exc}", url=url, reason="network") from exc


def normalize_url(raw: str) -> str:
    """Return *raw* as an absolute http(s) URL.

    ``https://`` is prepended when no scheme is present, scheme and host are
    lowercased and a lone trailing slash on a bare host is dropped.

    Raises:
        ValueError: If the result is not a well-formed absolute URL.
    """
    url = raw.strip()
    if not _SCHEME_RE.match(url):
        url = f"https://{url}"

    parts = urlsplit(url)
    host = parts.hostname
    if not host or any(ch.isspace() for ch in parts.netloc):
        raise ValueError(f"Invalid URL: {raw!r}")
    # Accessing .port validates it and raises ValueError when malformed.
    parts.port

    path = parts.path
    if path == "/" and not parts.query and not parts.fragment:
        path = ""

    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), path, parts.query, parts.fragment)
    )


def is_valid_url(raw: str) -> bool:
    """Return ``True`` when *raw* normalizes and its host looks like a domain."""
    try:
        host = urlsplit(normalize_url(raw)).hostname
    except ValueError:
        return False
    return bool(host) and "." in host
