"""Unit tests for the database engine and session services."""

from datetime import date

import pytest
from sqlalchemy import StaticPool
from sqlmodel import select

from fitness_users.core.services import DbManageService, DbSessionService
from fitness_users.core.services.database.db_session import build_engine
from fitness_users.entities.user import UserTable
from fitness_users.runtime.config import ConfigData
from fitness_users.runtime.config.config_data import DatabaseConfig


def _in_memory_config() -> ConfigData:
    return ConfigData(database=DatabaseConfig(url="sqlite://"))


@pytest.fixture
def database_service():
    service = DbSessionService(_in_memory_config())
    DbManageService(service.engine).create_all()
    yield service
    service.dispose()


def _row(email: str) -> UserTable:
    return UserTable(
        first_name="Test", last_name="User", birthdate=date(1990, 1, 1), email=email
    )


class TestBuildEngine:
    def test_in_memory_uses_single_shared_connection(self):
        engine = build_engine(_in_memory_config())

        assert isinstance(engine.pool, StaticPool)
        engine.dispose()

    def test_file_database(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'users.db'}"
        engine = build_engine(ConfigData(database=DatabaseConfig(url=url)))

        DbManageService(engine).create_all()

        assert (tmp_path / "users.db").exists()
        engine.dispose()


class TestDbSessionService:
    def test_health_check(self, database_service: DbSessionService):
        assert database_service.health_check() is True

    def test_session_scope_commits(self, database_service: DbSessionService):
        with database_service.session_scope() as session:
            session.add(_row("a@x.com"))

        with database_service.session_scope() as session:
            emails = session.exec(select(UserTable.email)).all()

        assert emails == ["a@x.com"]

    def test_session_scope_rolls_back_on_error(self, database_service: DbSessionService):
        with pytest.raises(RuntimeError):
            with database_service.session_scope() as session:
                session.add(_row("b@x.com"))
                session.flush()
                raise RuntimeError("boom")

        with database_service.session_scope() as session:
            assert session.exec(select(UserTable)).all() == []

    def test_sessions_keep_loaded_values_after_commit(
        self, database_service: DbSessionService
    ):
        session = database_service.get_session()
        row = _row("c@x.com")
        session.add(row)
        session.commit()
        session.close()

        assert row.email == "c@x.com"
        assert row.id is not None
