"""Database model exports."""

from .game_session import GameSession

__all__ = ["GameSession"]
