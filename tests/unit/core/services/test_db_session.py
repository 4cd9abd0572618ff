"""Tests for the database session service."""

import pytest
from sqlalchemy import func
from sqlmodel import select

from src.bookshelf.core.services import DbSessionService
from src.bookshelf.entities.core.user import User, UserRepository
from src.bookshelf.runtime.config.config_data import ConfigData
from src.bookshelf.runtime.init_db import init_db


@pytest.fixture
def db_service(tmp_path) -> DbSessionService:
    config = ConfigData()
    config.database.url = f"sqlite:///{tmp_path / 'bookshelf.db'}"
    service = DbSessionService(config)
    init_db(service)
    yield service
    service.dispose()


def test_health_check(db_service):
    assert db_service.health_check() is True


def test_session_scope_commits(db_service):
    with db_service.session_scope() as session:
        UserRepository(session).create(User(id="u1", name="One"))

    with db_service.session_scope() as session:
        assert UserRepository(session).get("u1") is not None


def test_session_scope_rolls_back_on_error(db_service):
    with pytest.raises(RuntimeError):
        with db_service.session_scope() as session:
            UserRepository(session).create(User(id="u2", name="Two"))
            raise RuntimeError("abort")

    with db_service.session_scope() as session:
        assert UserRepository(session).get("u2") is None


def test_engine_uses_configured_url(db_service):
    assert db_service.engine.url.get_backend_name() == "sqlite"
    assert db_service.engine.url.database.endswith("bookshelf.db")


def test_sqlite_lower_is_unicode_aware(db_service):
    with db_service.session_scope() as session:
        result = session.exec(select(func.lower("ÉLAN Über"))).one()

    assert result == "élan über"
