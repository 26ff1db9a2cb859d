"""Schema management for the application database."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel

from fitness_users.core.services.database.db_session import build_engine
from fitness_users.runtime.context import get_config


class DbManageService:
    def __init__(self, engine: Engine | None = None):
        self._engine = engine if engine is not None else build_engine(get_config())

    def create_all(self) -> None:
        """Create all database tables."""
        from fitness_users.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")
