"""Repository for gameplay sessions.

Every operation opens its own scoped :class:`~sqlmodel.Session`, so the pooled
connection goes back to the engine whether the query succeeds or not.
Operations never raise store errors; they hand back a :class:`StoreResult`
and leave it to the caller to decide how much of the failure to expose.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from ..models import GameSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOP_SCORES_LIMIT = 5

# Driver errors raised while binding parameters (oversized ints, unsupported
# types, unencodable text) are not always wrapped by SQLAlchemy.
STORE_ERRORS = (SQLAlchemyError, OverflowError, TypeError, ValueError)

# Request body keys mapped onto table columns.
BODY_FIELDS = {
    "playerName": "player_name",
    "score": "score",
    "timePlayed": "time_played",
    "distanceCovered": "distance_covered",
    "obstaclesAvoided": "obstacles_avoided",
}


class StoreFailure(Exception):
    """Any error raised by the persistence layer, with its cause attached."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Either a value or a :class:`StoreFailure`, never both."""

    value: Optional[T] = None
    error: Optional[StoreFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StoreFailure) -> "StoreResult[T]":
        return cls(error=error)


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"


def session_to_dict(game_session: GameSession) -> Dict[str, Any]:
    """Serialise a stored session using its column names."""

    return {
        "id": game_session.id,
        "player_name": game_session.player_name,
        "score": game_session.score,
        "time_played": game_session.time_played,
        "distance_covered": game_session.distance_covered,
        "obstacles_avoided": game_session.obstacles_avoided,
        "date_played": _format_timestamp(game_session.date_played),
    }


class GameSessionRepository:
    """Create, list and aggregate rows of the ``game_sessions`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save_session(self, body: Mapping[str, Any]) -> StoreResult[int]:
        """Insert one session from a raw request body.

        Values are bound as-is; a missing key becomes NULL and is left for the
        column constraints to reject. Returns the assigned id.
        """

        values = {column: body.get(key) for key, column in BODY_FIELDS.items()}
        try:
            with Session(self._engine) as session:
                game_session = GameSession(**values)
                session.add(game_session)
                session.commit()
                session.refresh(game_session)
                logger.debug(
                    "Saved game session %s for %r", game_session.id, game_session.player_name
                )
                return StoreResult.success(game_session.id)
        except STORE_ERRORS as exc:
            return StoreResult.failure(StoreFailure("save_session", exc))

    def list_sessions(self) -> StoreResult[List[Dict[str, Any]]]:
        """Every stored session, most recently played first."""

        try:
            with Session(self._engine) as session:
                rows = session.exec(
                    select(GameSession).order_by(
                        GameSession.date_played.desc(), GameSession.id.desc()
                    )
                ).all()
                return StoreResult.success([session_to_dict(row) for row in rows])
        except STORE_ERRORS as exc:
            return StoreResult.failure(StoreFailure("list_sessions", exc))

    def game_stats(self) -> StoreResult[Dict[str, Any]]:
        """Count, mean score and the top scores.

        The three queries share a session but not a snapshot, so a concurrent
        insert may land between them. With no rows the average is ``None``.
        """

        try:
            with Session(self._engine) as session:
                total_games = session.exec(select(func.count(GameSession.id))).one()
                average = session.exec(select(func.avg(GameSession.score))).one()
                top = session.exec(
                    select(GameSession)
                    .order_by(GameSession.score.desc(), GameSession.id.asc())
                    .limit(TOP_SCORES_LIMIT)
                ).all()
                return StoreResult.success(
                    {
                        "totalGames": int(total_games or 0),
                        "averageScore": float(average) if average is not None else None,
                        "topScores": [session_to_dict(row) for row in top],
                    }
                )
        except STORE_ERRORS as exc:
            return StoreResult.failure(StoreFailure("game_stats", exc))


__all__ = [
    "BODY_FIELDS",
    "GameSessionRepository",
    "STORE_ERRORS",
    "StoreFailure",
    "StoreResult",
    "TOP_SCORES_LIMIT",
    "session_to_dict",
]
