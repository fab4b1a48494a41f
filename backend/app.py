"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    DATABASE_URL,
    DB_ECHO,
    DB_RESET,
    HOST,
    LOG_LEVEL,
    PORT,
    configure_logging,
    create_db_engine,
    init_db,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine, reset=app.state.db_reset)
    yield
    if app.state.owns_engine:
        app.state.engine.dispose()


def create_app(engine: Optional[Engine] = None, *, db_reset: bool = DB_RESET) -> FastAPI:
    """Build the app around ``engine``, creating one from settings if omitted."""

    configure_logging(LOG_LEVEL)

    app = FastAPI(title="Game Session API", version="1.0.0", lifespan=lifespan)
    app.state.owns_engine = engine is None
    app.state.engine = engine if engine is not None else create_db_engine(
        DATABASE_URL, echo=DB_ECHO
    )
    app.state.db_reset = db_reset

    # Credentials stay off: the API uses neither cookies nor auth headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.app:app", host=HOST, port=PORT, reload=True)
