"""Shared fixtures: every test gets its own in-memory database."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from backend.app import create_app
from backend.core import create_db_engine, init_db
from backend.services import GameSessionRepository


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    init_db(engine)
    return GameSessionRepository(engine)


@pytest.fixture
def client(engine):
    app = create_app(engine, db_reset=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def broken_client(client, engine):
    """A client whose tables vanished after startup."""

    SQLModel.metadata.drop_all(engine)
    return client


def make_body(**overrides):
    body = {
        "playerName": "Ann",
        "score": 100,
        "timePlayed": 30,
        "distanceCovered": 500,
        "obstaclesAvoided": 3,
    }
    body.update(overrides)
    return body
