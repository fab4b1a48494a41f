"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    DATABASE_URL,
    DATA_DIR,
    DB_ECHO,
    DB_RESET,
    HOST,
    LOG_LEVEL,
    PORT,
)
from .database import create_db_engine, get_engine, init_db
from .logs import configure_logging

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_ECHO",
    "DB_RESET",
    "HOST",
    "LOG_LEVEL",
    "PORT",
    "configure_logging",
    "create_db_engine",
    "get_engine",
    "init_db",
]
