"""Database model for recorded gameplay sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel, func


class GameSession(SQLModel, table=True):
    """One completed play session. Rows are only ever inserted."""

    __tablename__ = "game_sessions"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    player_name: str
    score: int
    time_played: float
    distance_covered: float
    obstacles_avoided: int
    # Filled in by the database on insert; the ORM omits it while unset.
    date_played: Optional[datetime] = ORMField(
        default=None,
        nullable=False,
        index=True,
        sa_column_kwargs={"server_default": func.now()},
    )


__all__ = ["GameSession"]
