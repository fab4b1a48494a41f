"""Aggregate API routers."""

from fastapi import APIRouter

from .game import router as game_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    game_router,
)

__all__ = ["ALL_ROUTERS"]
