"""User API router with CRUD and lookup operations.

Static paths are declared before ``/{user_id}`` so they are matched first.
"""

import re
from datetime import date

from fastapi import APIRouter, Depends, Response, status

from fitness_users.api.http.deps import get_user_mapper, get_user_service
from fitness_users.core.errors import InvalidInputError, UserNotFoundError
from fitness_users.core.models.user import (
    SimpleUserView,
    UserCreateRequest,
    UserEmailView,
    UserUpdateRequest,
    UserView,
)
from fitness_users.core.services import UserMapper, UserService

router = APIRouter(prefix="/v1/users", tags=["users"])


_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` date; compact and week forms are rejected."""
    message = f"Invalid date '{value}', expected format YYYY-MM-DD."
    if not _ISO_DATE.fullmatch(value):
        raise InvalidInputError(message)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidInputError(message) from None


@router.get("", response_model=list[UserView])
def list_users(
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> list[UserView]:
    """List all users."""
    return [mapper.to_view(user) for user in user_service.find_all_users()]


@router.get("/simple", response_model=list[SimpleUserView])
def list_simple_users(
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> list[SimpleUserView]:
    """List all users as id and names only."""
    return [mapper.to_simple_view(user) for user in user_service.find_all_users()]


@router.get("/email", response_model=list[UserEmailView])
def list_users_by_email(
    email: str | None = None,
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> list[UserEmailView]:
    """Find the user owning ``email``, or list every user when no email is given."""
    if email:
        user = user_service.get_user_by_email(email)
        return [mapper.to_email_view(user)] if user is not None else []
    return [mapper.to_email_view(user) for user in user_service.find_all_users()]


@router.get("/older/{birthdate}", response_model=list[UserView])
def list_users_born_before(
    birthdate: str,
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> list[UserView]:
    """List users born strictly before the given date."""
    cutoff = _parse_iso_date(birthdate)
    return [mapper.to_view(user) for user in user_service.find_users_born_before(cutoff)]


@router.get("/simple/{user_id}", response_model=SimpleUserView)
def get_simple_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> SimpleUserView:
    """Get a user by ID as id and names only."""
    user = user_service.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return mapper.to_simple_view(user)


@router.get("/{user_id}", response_model=UserView)
def get_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> UserView:
    """Get a user by ID."""
    user = user_service.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return mapper.to_view(user)


@router.put("/{user_id}", response_model=UserView)
def update_user(
    user_id: int,
    user_update: UserUpdateRequest,
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> UserView:
    """Update a user; omitted or null fields keep their stored values."""
    return mapper.to_view(user_service.update_user(user_id, user_update))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
) -> Response:
    """Delete a user."""
    user_service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("", response_model=UserView, status_code=status.HTTP_201_CREATED)
def create_user(
    user_create: UserCreateRequest,
    user_service: UserService = Depends(get_user_service),
    mapper: UserMapper = Depends(get_user_mapper),
) -> UserView:
    """Create a new user."""
    created = user_service.create_user(mapper.to_entity(user_create))
    return mapper.to_view(created)
