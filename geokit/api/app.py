"""FastAPI application factory.

Collaborators
-------------
The persistence (``ScanStore``) and quota (``QuotaGate``) collaborators are
attached to ``app.state`` by :func:`create_app`.  Both default to the
in-memory implementations in :mod:`geokit.collaborators`.

Routers
-------

    /scan   — run a scan and fetch stored results
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geokit.api.routers import scan as scan_router
from geokit.collaborators import InMemoryScanStore, QuotaGate, ScanStore, UnlimitedQuota
from geokit.logger import get_logger

logger = get_logger(__name__)


def create_app(
    store: Optional[ScanStore] = None,
    quota: Optional[QuotaGate] = None,
) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="GeoKit API",
        description=(
            "Scores a web page's AI visibility: how well its content is "
            "structured for extraction and citation by answer engines."
        ),
        version="0.1.0",
    )

    app.state.store = store if store is not None else InMemoryScanStore()
    app.state.quota = quota if quota is not None else UnlimitedQuota()

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=500, content={"error": "An unexpected error occurred"}
        )

    app.include_router(scan_router.router, prefix="/scan", tags=["scan"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn geokit.api.app:app --reload
app = create_app()
