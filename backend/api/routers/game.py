"""Gameplay session endpoints."""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from ...core import get_engine
from ...services.game_sessions import GameSessionRepository, StoreResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/game", tags=["game"])


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def _reject_constant(name: str) -> float:
    raise ValueError(f"Unsupported JSON constant: {name}")


async def read_json_object(request: Request) -> Dict[str, Any]:
    """Return the request body if it is a JSON object, otherwise ``{}``.

    Non-finite numbers (``NaN``, ``Infinity``, ``1e999``) count as invalid
    JSON. An empty result leaves every column NULL for the store to reject.
    """

    raw = await request.body()
    try:
        body = json.loads(raw, parse_float=_finite_float, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        logger.debug("Unreadable request body: %s", exc)
        return {}
    return body if isinstance(body, dict) else {}


def get_repository(engine: Engine = Depends(get_engine)) -> GameSessionRepository:
    return GameSessionRepository(engine)


def _failed(result: StoreResult, message: str) -> JSONResponse:
    error = result.error
    logger.error(
        "%s: %s",
        message,
        error,
        exc_info=(type(error.cause), error.cause, error.cause.__traceback__),
    )
    return JSONResponse({"message": message}, status_code=500)


@router.post("/save-session", status_code=201)
def save_session(
    body: Dict[str, Any] = Depends(read_json_object),
    repository: GameSessionRepository = Depends(get_repository),
):
    """Record one finished play session."""

    result = repository.save_session(body)
    if not result.ok:
        return _failed(result, "Failed to save game session")
    return {"message": "Game session saved successfully"}


@router.get("/sessions")
def list_sessions(repository: GameSessionRepository = Depends(get_repository)):
    """List every recorded session, newest first."""

    result = repository.list_sessions()
    if not result.ok:
        return _failed(result, "Failed to fetch game sessions")
    return result.value


@router.get("/stats")
def game_stats(repository: GameSessionRepository = Depends(get_repository)):
    """Total games, average score and the top five scores."""

    result = repository.game_stats()
    if not result.ok:
        return _failed(result, "Failed to fetch game statistics")
    return result.value


__all__ = ["get_repository", "read_json_object", "router"]
