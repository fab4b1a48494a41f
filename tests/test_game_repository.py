"""Repository-level tests: tagged results and query shapes."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import SQLModel

from backend.models import GameSession
from backend.services import StoreFailure, StoreResult
from conftest import make_body


def test_save_session_returns_assigned_id(repository):
    first = repository.save_session(make_body())
    second = repository.save_session(make_body(score=5))

    assert first.ok and second.ok
    assert first.error is None
    assert second.value > first.value


def test_saved_session_gets_date_played(repository):
    repository.save_session(make_body())
    [record] = repository.list_sessions().value
    assert record["date_played"] is not None


def test_save_session_ignores_unknown_keys(repository):
    result = repository.save_session(make_body(id=999, date_played="1999-01-01", extra=True))
    assert result.ok
    [record] = repository.list_sessions().value
    assert record["id"] != 999
    assert not record["date_played"].startswith("1999")


def test_missing_column_value_is_a_store_failure(repository):
    result = repository.save_session({"playerName": "Ann"})

    assert not result.ok
    assert result.value is None
    assert isinstance(result.error, StoreFailure)
    assert result.error.operation == "save_session"
    assert isinstance(result.error.cause, IntegrityError)


def test_game_stats_empty(repository):
    result = repository.game_stats()
    assert result.ok
    assert result.value == {"totalGames": 0, "averageScore": None, "topScores": []}


def test_game_stats_average(repository):
    for score in (10, 20, 33):
        repository.save_session(make_body(score=score))

    stats = repository.game_stats().value
    assert stats["totalGames"] == 3
    assert stats["averageScore"] == 21.0


def test_top_score_ties_keep_insert_order(repository):
    repository.save_session(make_body(playerName="early", score=50))
    repository.save_session(make_body(playerName="late", score=50))

    top = repository.game_stats().value["topScores"]
    assert [entry["player_name"] for entry in top] == ["early", "late"]


def test_failures_carry_operation_and_cause(repository, engine):
    SQLModel.metadata.drop_all(engine)

    for operation in ("save_session", "list_sessions", "game_stats"):
        method = getattr(repository, operation)
        result = method(make_body()) if operation == "save_session" else method()
        assert not result.ok
        assert result.error.operation == operation
        assert isinstance(result.error.cause, OperationalError)


def test_repository_recovers_once_table_exists_again(repository, engine):
    SQLModel.metadata.drop_all(engine)
    assert not repository.list_sessions().ok

    SQLModel.metadata.create_all(engine)
    assert repository.save_session(make_body()).ok
    assert len(repository.list_sessions().value) == 1


def test_store_result_constructors():
    failure = StoreFailure("list_sessions", RuntimeError("boom"))

    assert StoreResult.success([]).ok
    assert not StoreResult.failure(failure).ok
    assert "list_sessions failed: boom" in str(failure)


def test_date_played_is_a_store_default():
    column = GameSession.__table__.c.date_played
    assert column.server_default is not None
    assert column.nullable is False


def test_raw_insert_without_date_played_gets_timestamp(repository, engine):
    with engine.begin() as connection:
        connection.execute(
            text(
                "INSERT INTO game_sessions "
                "(player_name, score, time_played, distance_covered, obstacles_avoided) "
                "VALUES (:name, 7, 1.5, 20, 2)"
            ),
            {"name": "raw"},
        )

    [record] = repository.list_sessions().value
    assert record["player_name"] == "raw"
    assert record["date_played"] is not None
    assert record["date_played"].endswith("Z")


def test_oversized_integer_is_a_store_failure(repository):
    result = repository.save_session(make_body(score=10**20))

    assert not result.ok
    assert result.error.operation == "save_session"
    assert isinstance(result.error.cause, OverflowError)
    assert repository.list_sessions().value == []
