"""Service layer helpers."""

from .game_sessions import (
    GameSessionRepository,
    StoreFailure,
    StoreResult,
    session_to_dict,
)

__all__ = [
    "GameSessionRepository",
    "StoreFailure",
    "StoreResult",
    "session_to_dict",
]
