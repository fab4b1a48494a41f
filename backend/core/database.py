"""Database engine construction helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from fastapi import Request
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

logger = logging.getLogger(__name__)


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Build the engine (and its connection pool) for ``url``."""

    parsed = make_url(url)
    kwargs: Dict[str, Any] = {}
    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        database = parsed.database
        if not database or database == ":memory:":
            # One shared connection, otherwise every checkout sees an empty database.
            kwargs["poolclass"] = StaticPool
        else:
            Path(database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=echo, **kwargs)
    logger.info("Database engine ready (%s)", parsed.render_as_string(hide_password=True))
    return engine


def init_db(engine: Engine, *, reset: bool = False) -> None:
    """Create every registered table, dropping them first when ``reset``."""

    if reset:
        logger.warning("DB_RESET set, dropping all tables")
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)


def get_engine(request: Request) -> Engine:
    """FastAPI dependency returning the engine owned by the running app."""

    return request.app.state.engine


__all__ = ["create_db_engine", "get_engine", "init_db"]
