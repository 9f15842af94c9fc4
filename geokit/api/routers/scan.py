"""Scan endpoints.

Routes
------
POST /scan                Body: {"url": "https://..."}   → run a scan
GET  /scan?url=<url>                                      → run a scan
GET  /scan/{record_id}                                    → stored result

An optional ``X-User-Id`` header identifies the caller to the quota and
persistence collaborators.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from geokit.scanner import FetchError, scan_url

router = APIRouter()

# Status used when a FetchError carries no HTTP status of its own.
_FETCH_FAILURE_STATUS = {
    "not_html": 400,
    "timeout": 504,
    "network": 502,
    "http_status": 502,
}


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScanRequest(BaseModel):
    url: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error(http_status: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=http_status, content={"error": message, **extra})


def _fetch_error_response(exc: FetchError) -> JSONResponse:
    status = exc.status_code or _FETCH_FAILURE_STATUS[exc.reason]
    return _error(status, exc.message, status_code=exc.status_code, url=exc.url)


async def _perform_scan(request: Request, url: Optional[str], user_id: Optional[str]):
    if not url or not url.strip():
        return _error(400, "URL is required")

    if user_id:
        decision = request.app.state.quota.check(user_id)
        if not decision.allowed:
            return _error(429, decision.message or "Scan limit reached", limit_reached=True)

    try:
        result = await scan_url(url)
    except ValueError as exc:
        return _error(400, str(exc))
    except FetchError as exc:
        return _fetch_error_response(exc)

    scan_id = request.app.state.store.save(result, user_id=user_id)
    return {**result.to_dict(), "scan_id": scan_id}


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("")
async def scan_post(
    body: ScanRequest,
    request: Request,
    x_user_id: Optional[str] = Header(default=None),
):
    """Fetch, extract and score the page at ``body.url``."""
    return await _perform_scan(request, body.url, x_user_id)


@router.get("")
async def scan_get(
    request: Request,
    url: Optional[str] = None,
    x_user_id: Optional[str] = Header(default=None),
):
    """Query-string variant of ``POST /scan``."""
    return await _perform_scan(request, url, x_user_id)


@router.get("/{record_id}")
def get_scan(record_id: str, request: Request):
    """Return a previously stored scan result."""
    result = request.app.state.store.get(record_id)
    if result is None:
        return _error(404, "Scan not found")
    return {**result.to_dict(), "scan_id": record_id}
