"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from fitness_users.api.http.app_data import ApplicationDependencies
from fitness_users.core.services import DbSessionService, UserMapper, UserService


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped database session and close it afterwards."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_user_service(db_session: Session = Depends(get_db_session)) -> UserService:
    """Get a User service bound to the request's session."""
    return UserService(db_session)


def get_user_mapper() -> UserMapper:
    return UserMapper()
