"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from geokit.api import app

    uvicorn geokit.api:app --reload
"""

from geokit.api.app import app, create_app

__all__ = ["app", "create_app"]
