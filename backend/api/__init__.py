"""API assembly helpers."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI) -> None:
    """Mount every router in ``ALL_ROUTERS`` on the app."""

    for router in ALL_ROUTERS:
        app.include_router(router)
        logger.debug("Mounted %s", ", ".join(route.path for route in router.routes))


__all__ = ["register_routes"]
