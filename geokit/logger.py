"""Console logging shared by every GeoKit module."""

from __future__ import annotations

import logging

from geokit.config import settings

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for *name* that writes to the console.

    Handlers are attached once per logger, so calling this repeatedly from
    module scope is safe.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)

    return logger
